from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from movielist.repositories.base_repository import BaseRepository
from movielist.models.user import User
from movielist.core.exceptions import ConflictError

class UserRepository(BaseRepository[User]):
    """User repository with user-specific operations"""
    
    def __init__(self, db: Session):
        super().__init__(User, db)
    
    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        return self.filter_one_by(email=email)
    
    def create_user(self, name: str, email: str, password_hash: str) -> User:
        """Insert a user; the unique index on email decides conflicts"""
        try:
            return self.create({
                "name": name,
                "email": email,
                "password_hash": password_hash
            })
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email already in use") from e
