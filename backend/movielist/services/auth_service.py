import logging
from typing import Optional
from sqlalchemy.orm import Session
from movielist.core.config import Settings, get_settings
from movielist.core.exceptions import AuthError, NotFoundError, ValidationError
from movielist.core.security import (
    burn_password_check, create_access_token, decode_access_token,
    get_password_hash, verify_password
)
from movielist.repositories.user_repository import UserRepository
from movielist.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Registration, login and stateless token verification"""
    
    def __init__(self, db: Optional[Session], settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()
        self.user_repository = UserRepository(db)
    
    def register(self, name: str, email: str, password: str) -> User:
        """Create a user with a salted password hash"""
        name = (name or "").strip()
        email = _normalize_email(email)
        if not name or not email or not password:
            raise ValidationError("Please provide name, email and password")
        
        password_hash = get_password_hash(password, rounds=self.settings.bcrypt_rounds)
        user = self.user_repository.create_user(
            name=name,
            email=email,
            password_hash=password_hash
        )
        logger.info(f"User registered with ID: {user.id}")
        return user
    
    def login(self, email: str, password: str) -> dict:
        """Return a fresh token and the user; one message for every failure"""
        email = _normalize_email(email)
        if not email or not password:
            raise ValidationError("Please provide email and password")
        
        user = self.user_repository.get_by_email(email)
        if user is None:
            burn_password_check(password, rounds=self.settings.bcrypt_rounds)
            logger.info("Login failed: unknown email")
            raise AuthError(INVALID_CREDENTIALS)
        
        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed for user ID: {user.id}")
            raise AuthError(INVALID_CREDENTIALS)
        
        token = create_access_token(user.id, self.settings)
        logger.info(f"User logged in with ID: {user.id}")
        return {"token": token, "user": user}
    
    def verify_token(self, token: str) -> int:
        """Return the user id a token was issued for; never touches the database"""
        payload = decode_access_token(token, self.settings)
        return payload["userId"]
    
    def get_user(self, user_id: int) -> User:
        user = self.user_repository.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
