import logging
from typing import Optional

from supabase import Client

from vtboard.core.errors import RemoteOperationFailed, ValidationFailed
from vtboard.modules.posts.schemas import PostCreate

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_post(self, user_id: str, title: Optional[str], body: Optional[str], vtuber_id: Optional[str] = None) -> None:
        """Create a post scoped to ``vtuber_id`` (None means unscoped)"""
        title = (title or "").strip()
        body = (body or "").strip()
        if not title:
            raise ValidationFailed("Enter a title.")
        if not body:
            raise ValidationFailed("Enter some content.")

        data = PostCreate(vtuber_id=vtuber_id or None, title=title, body=body, user_id=user_id)
        try:
            self.supabase.table("posts").insert(data.model_dump()).execute()
        except Exception as e:
            logger.warning(f"Failed to create post for {user_id}: {e}")
            raise RemoteOperationFailed(
                "Could not publish the post. Check your permissions or the row-level security policy."
            )

    def delete_post(self, post_id: str) -> None:
        try:
            self.supabase.table("posts")\
                .delete()\
                .eq("id", post_id)\
                .execute()
        except Exception as e:
            logger.warning(f"Failed to delete post {post_id}: {e}")
            raise RemoteOperationFailed(
                "Could not delete the post. Check your permissions or the row-level security policy."
            )
