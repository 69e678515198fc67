import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from vtboard.core.errors import RemoteOperationFailed, ValidationFailed
from vtboard.modules.comments.schemas import CommentCreate

logger = logging.getLogger(__name__)

COMMENT_COLUMNS = "*, profiles(nickname, avatar_url)"


class CommentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def add_comment(self, post_id: str, user_id: str, body: Optional[str]) -> None:
        body = (body or "").strip()
        if not body:
            raise ValidationFailed("Enter a comment.")
        data = CommentCreate(post_id=post_id, user_id=user_id, body=body)
        try:
            self.supabase.table("comments").insert(data.model_dump()).execute()
        except Exception as e:
            logger.warning(f"Failed to comment on post {post_id}: {e}")
            raise RemoteOperationFailed("Could not post the comment.")

    def comments_by_post(self, post_ids: List[str]) -> Dict[str, List[Dict[str, Any]]]:
        """Raw comment rows grouped by post id, oldest first. Raises on remote errors."""
        if not post_ids:
            return {}
        result = self.supabase.table("comments")\
            .select(COMMENT_COLUMNS)\
            .in_("post_id", post_ids)\
            .order("created_at", desc=False)\
            .execute()
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for row in result.data or []:
            grouped.setdefault(str(row["post_id"]), []).append(row)
        return grouped
