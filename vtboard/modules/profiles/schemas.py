from pydantic import BaseModel
from typing import Optional


class ProfileCreate(BaseModel):
    id: str
    nickname: str
    avatar_url: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    nickname: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True
