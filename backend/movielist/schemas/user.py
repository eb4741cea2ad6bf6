from pydantic import BaseModel, ConfigDict, EmailStr
from typing import List

from movielist.schemas.movie import ListEntryResponse

class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str

class UserLogin(BaseModel):
    email: str
    password: str

class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str

class LoginResponse(BaseModel):
    token: str
    user: UserPublic

class UserProfile(UserPublic):
    favorites: List[ListEntryResponse] = []
    watchlist: List[ListEntryResponse] = []
