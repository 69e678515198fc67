from pydantic import BaseModel
from typing import Optional


class PostCreate(BaseModel):
    vtuber_id: Optional[str] = None
    title: str
    body: str
    user_id: str
