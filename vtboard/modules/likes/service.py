import logging
from typing import Dict, List, Optional, Set

from supabase import Client

from vtboard.core.errors import RemoteOperationFailed

logger = logging.getLogger(__name__)


class LikeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def find_like_id(self, post_id: str, user_id: str) -> Optional[str]:
        """ID of the user's like on the post. A failed lookup counts as "not liked"."""
        try:
            result = self.supabase.table("likes")\
                .select("id")\
                .eq("post_id", post_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.warning(f"Like lookup failed for post {post_id}: {e}")
            return None
        if not result.data:
            return None
        return result.data[0]["id"]

    def toggle_like(self, post_id: str, user_id: str) -> bool:
        """Remove the user's like if present, add it otherwise. Returns the new state.

        This is read-then-act: two concurrent toggles may both see no like and
        both insert; the (post_id, user_id) unique constraint rejects the second.
        """
        like_id = self.find_like_id(post_id, user_id)
        if like_id is not None:
            try:
                self.supabase.table("likes").delete().eq("id", like_id).execute()
            except Exception as e:
                logger.warning(f"Failed to remove like {like_id}: {e}")
                raise RemoteOperationFailed("Could not remove your like.")
            return False

        try:
            self.supabase.table("likes").insert({"post_id": post_id, "user_id": user_id}).execute()
        except Exception as e:
            logger.warning(f"Failed to like post {post_id}: {e}")
            raise RemoteOperationFailed("Could not like the post.")
        return True

    def likers_by_post(self, post_ids: List[str]) -> Dict[str, Set[str]]:
        """Map post id to the ids of users liking it. Raises on remote errors."""
        if not post_ids:
            return {}
        result = self.supabase.table("likes")\
            .select("post_id, user_id")\
            .in_("post_id", post_ids)\
            .execute()
        likers: Dict[str, Set[str]] = {}
        for row in result.data or []:
            likers.setdefault(str(row["post_id"]), set()).add(str(row["user_id"]))
        return likers
