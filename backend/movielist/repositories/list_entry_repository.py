import logging
from typing import List, Optional
from sqlalchemy import delete
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from movielist.repositories.base_repository import BaseRepository
from movielist.models.list_entry import ListEntry
from movielist.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

class ListEntryRepository(BaseRepository[ListEntry]):
    """Repository for saved movies"""
    
    def __init__(self, db: Session):
        super().__init__(ListEntry, db)
    
    def get_for_user(self, user_id: int) -> List[ListEntry]:
        """Get every saved movie for a user in insertion order"""
        return self.filter_by(user_id=user_id)
    
    def get_entry(self, user_id: int, movie_id: int) -> Optional[ListEntry]:
        """Get a user's row for one movie"""
        with self.store_call():
            return (
                self.db.query(ListEntry)
                .populate_existing()
                .filter_by(user_id=user_id, movie_id=movie_id)
                .first()
            )
    
    def _upsert_statement(self, values: dict):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(ListEntry).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[ListEntry.user_id, ListEntry.movie_id],
                set_={"list_type": stmt.excluded.list_type},
            )
        if dialect == "sqlite":
            stmt = sqlite.insert(ListEntry).values(**values)
            return stmt.on_conflict_do_update(
                index_elements=[ListEntry.user_id, ListEntry.movie_id],
                set_={"list_type": stmt.excluded.list_type},
            )
        if dialect in ("mysql", "mariadb"):
            stmt = mysql.insert(ListEntry).values(**values)
            return stmt.on_duplicate_key_update(list_type=stmt.inserted.list_type)
        raise NotImplementedError(f"Upsert is not supported for the {dialect} dialect")
    
    def upsert_entry(self, user_id: int, movie_id: int, title: str, poster_path: Optional[str], list_type: str) -> ListEntry:
        """Insert the row, or move an existing (user, movie) row to list_type.

        Runs as one INSERT .. ON CONFLICT statement so concurrent adds of the same
        movie never produce two rows. Title and poster of an existing row are kept.
        """
        stmt = self._upsert_statement({
            "user_id": user_id,
            "movie_id": movie_id,
            "title": title,
            "poster_path": poster_path,
            "list_type": list_type,
        })
        try:
            with self.store_call():
                self.db.execute(stmt)
                self.db.commit()
        except IntegrityError as e:
            # only the user_id foreign key can still fail once the unique key is handled
            self.db.rollback()
            raise NotFoundError("User not found") from e
        return self.get_entry(user_id, movie_id)
    
    def delete_entry(self, user_id: int, movie_id: int) -> bool:
        """Delete a user's row for one movie; False when nothing matched"""
        stmt = delete(ListEntry).where(
            ListEntry.user_id == user_id,
            ListEntry.movie_id == movie_id,
        )
        with self.store_call():
            result = self.db.execute(stmt)
            self.db.commit()
        return result.rowcount > 0
