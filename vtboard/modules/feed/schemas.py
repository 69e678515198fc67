from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class FeedComment(BaseModel):
    id: str
    post_id: str
    user_id: str
    body: str
    created_at: datetime
    author_nickname: str


class FeedPost(BaseModel):
    """A post joined with its streamer, author, likes and comments."""
    id: str
    vtuber_id: Optional[str] = None
    title: str
    body: str
    user_id: str
    created_at: datetime
    vtuber_name: Optional[str] = None
    author_nickname: str
    like_count: int = 0
    liked_by_me: bool = False
    comments: List[FeedComment] = Field(default_factory=list)
