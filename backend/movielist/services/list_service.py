import logging
from typing import Dict, List, Optional, Union
from sqlalchemy.orm import Session
from movielist.core.enums import ListType
from movielist.core.exceptions import NotFoundError, ValidationError
from movielist.models.list_entry import ListEntry
from movielist.repositories.list_entry_repository import ListEntryRepository

logger = logging.getLogger(__name__)

class ListService:
    """Favorites and watchlist membership for a user"""
    
    def __init__(self, db: Session):
        self.db = db
        self.list_repository = ListEntryRepository(db)
    
    def get_lists(self, user_id: int) -> Dict[str, List[ListEntry]]:
        """Split a user's saved movies into favorites and watchlist"""
        lists = {"favorites": [], "watchlist": []}
        for entry in self.list_repository.get_for_user(user_id):
            if entry.list_type == ListType.FAVORITE.value:
                lists["favorites"].append(entry)
            elif entry.list_type == ListType.WATCHLIST.value:
                lists["watchlist"].append(entry)
            else:
                logger.warning(f"Skipping entry {entry.id} with unknown list type {entry.list_type!r}")
        return lists
    
    def upsert_entry(
        self,
        user_id: int,
        movie_id: Optional[int],
        title: Optional[str],
        poster_path: Optional[str],
        list_type: Union[ListType, str, None],
    ) -> ListEntry:
        """Add a movie to a list, or move it there if it is already saved"""
        if movie_id is None or not title or not list_type:
            raise ValidationError("movieId, title and listType are required")
        try:
            list_type = ListType(list_type)
        except ValueError:
            raise ValidationError(f"listType must be one of: {', '.join(ListType.values())}")
        
        entry = self.list_repository.upsert_entry(
            user_id=user_id,
            movie_id=movie_id,
            title=title,
            poster_path=poster_path,
            list_type=list_type.value
        )
        logger.info(f"User {user_id} saved movie {movie_id} to {list_type.value}")
        return entry
    
    def remove_entry(self, user_id: int, movie_id: int) -> None:
        """Remove a movie from whichever list holds it"""
        if not self.list_repository.delete_entry(user_id, movie_id):
            raise NotFoundError("Movie not found in any list")
        logger.info(f"User {user_id} removed movie {movie_id}")
