import logging
from typing import Any, Dict, List, Optional, Set

from supabase import Client

from vtboard.core.errors import RemoteOperationFailed
from vtboard.modules.comments.service import CommentService
from vtboard.modules.feed.schemas import FeedComment, FeedPost
from vtboard.modules.likes.service import LikeService

logger = logging.getLogger(__name__)

POST_COLUMNS = "*, vtubers(name), profiles(nickname, avatar_url)"
ANONYMOUS = "Anonymous"


def _embedded(row: Dict[str, Any], table: str, column: str) -> Optional[Any]:
    related = row.get(table)
    if not related:
        return None
    return related.get(column)


def to_feed_comment(row: Dict[str, Any]) -> FeedComment:
    return FeedComment(
        id=str(row["id"]),
        post_id=str(row["post_id"]),
        user_id=str(row["user_id"]),
        body=row["body"],
        created_at=row["created_at"],
        author_nickname=_embedded(row, "profiles", "nickname") or ANONYMOUS,
    )


def to_feed_post(
    row: Dict[str, Any],
    likers: Set[str],
    comment_rows: List[Dict[str, Any]],
    current_user_id: Optional[str],
) -> FeedPost:
    vtuber_id = row.get("vtuber_id")
    return FeedPost(
        id=str(row["id"]),
        vtuber_id=str(vtuber_id) if vtuber_id is not None else None,
        title=row["title"],
        body=row["body"],
        user_id=str(row["user_id"]),
        created_at=row["created_at"],
        vtuber_name=_embedded(row, "vtubers", "name"),
        author_nickname=_embedded(row, "profiles", "nickname") or ANONYMOUS,
        like_count=len(likers),
        liked_by_me=current_user_id is not None and current_user_id in likers,
        comments=[to_feed_comment(c) for c in comment_rows],
    )


class FeedService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.likes = LikeService(supabase)
        self.comments = CommentService(supabase)

    def load_posts(self, vtuber_id: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            query = self.supabase.table("posts").select(POST_COLUMNS)
            if vtuber_id:
                query = query.eq("vtuber_id", vtuber_id)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.warning(f"Failed to load posts: {e}")
            raise RemoteOperationFailed("Could not load posts.")
        return result.data or []

    def load_feed(self, current_user_id: Optional[str], vtuber_id: Optional[str] = None) -> List[FeedPost]:
        """Posts newest first, each with like count, own-like flag and comments.

        Likes and comments are best effort: if either query fails the feed
        still renders, with zero likes or no comments.
        """
        rows = self.load_posts(vtuber_id)
        post_ids = [str(row["id"]) for row in rows]

        likers: Dict[str, Set[str]] = {}
        comments: Dict[str, List[Dict[str, Any]]] = {}
        if post_ids:
            try:
                likers = self.likes.likers_by_post(post_ids)
            except Exception as e:
                logger.warning(f"Failed to load likes for {len(post_ids)} posts: {e}")
            try:
                comments = self.comments.comments_by_post(post_ids)
            except Exception as e:
                logger.warning(f"Failed to load comments for {len(post_ids)} posts: {e}")

        return [
            to_feed_post(row, likers.get(post_id, set()), comments.get(post_id, []), current_user_id)
            for row, post_id in zip(rows, post_ids)
        ]
