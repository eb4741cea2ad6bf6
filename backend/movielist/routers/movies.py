from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from movielist.core.auth import get_current_user
from movielist.db import get_db
from movielist.core.exceptions import handle_exception
from movielist.services.list_service import ListService
from movielist.schemas.movie import ListEntryCreate, ListEntryResponse, MessageResponse

router = APIRouter(prefix="/movies", tags=["movies"])

@router.post("", response_model=ListEntryResponse, status_code=status.HTTP_201_CREATED)
def add_movie(
    entry_data: ListEntryCreate,
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Save a movie to favorites or watchlist, moving it if already saved"""
    try:
        list_service = ListService(db)
        return list_service.upsert_entry(
            user_id=current_user_id,
            movie_id=entry_data.movie_id,
            title=entry_data.title,
            poster_path=entry_data.poster_path,
            list_type=entry_data.list_type
        )
    except Exception as e:
        raise handle_exception(e)

@router.delete("/{movie_id}", response_model=MessageResponse)
def remove_movie(
    movie_id: int,
    current_user_id: int = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a movie from the user's lists"""
    try:
        ListService(db).remove_entry(current_user_id, movie_id)
        return {"message": "Movie removed from list"}
    except Exception as e:
        raise handle_exception(e)
