from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from movielist.core.auth import get_current_user
from movielist.core.config import Settings, get_settings
from movielist.core.exceptions import handle_exception
from movielist.db import get_db
from movielist.schemas.user import UserProfile
from movielist.services.auth_service import AuthService
from movielist.services.list_service import ListService

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/profile", response_model=UserProfile)
def get_profile(
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    """Current user with their favorites and watchlist"""
    try:
        user = AuthService(db, settings).get_user(current_user_id)
        lists = ListService(db).get_lists(user.id)
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "favorites": lists["favorites"],
            "watchlist": lists["watchlist"],
        }
    except Exception as e:
        raise handle_exception(e)
