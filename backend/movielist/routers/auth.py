from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from movielist.db import get_db
from movielist.schemas.user import UserCreate, UserLogin, UserPublic, LoginResponse
from movielist.services.auth_service import AuthService
from movielist.core.config import Settings, get_settings
from movielist.core.exceptions import handle_exception

router = APIRouter(prefix="/auth", tags=["authentication"])

@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Register a new user"""
    try:
        auth_service = AuthService(db, settings)
        return auth_service.register(user_data.name, user_data.email, user_data.password)
    except Exception as e:
        raise handle_exception(e)

@router.post("/login", response_model=LoginResponse)
def login(
    user_credentials: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Login user and return a session token"""
    try:
        auth_service = AuthService(db, settings)
        return auth_service.login(user_credentials.email, user_credentials.password)
    except Exception as e:
        raise handle_exception(e)
