from pydantic import BaseModel


class CommentCreate(BaseModel):
    post_id: str
    user_id: str
    body: str
