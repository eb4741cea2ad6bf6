from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from movielist.core.enums import ListType

class ListEntryCreate(BaseModel):
    """Body of POST /movies; the client sends camelCase keys"""
    model_config = ConfigDict(populate_by_name=True)

    movie_id: int = Field(..., alias="movieId", description="External catalog movie ID")
    title: str = Field(..., min_length=1, max_length=500)
    poster_path: Optional[str] = Field(None, alias="posterPath", max_length=500)
    list_type: ListType = Field(..., alias="listType", description="'favorite' or 'watchlist'")

class ListEntryResponse(BaseModel):
    """A saved movie as stored"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    movie_id: int
    title: str
    poster_path: Optional[str] = None
    list_type: ListType
    created_at: Optional[datetime] = None

class MessageResponse(BaseModel):
    message: str
