from movielist.db import Base
from .user import User
from .list_entry import ListEntry

__all__ = ['Base', 'User', 'ListEntry']
