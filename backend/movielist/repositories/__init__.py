from .base_repository import BaseRepository
from .user_repository import UserRepository
from .list_entry_repository import ListEntryRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ListEntryRepository"
]
