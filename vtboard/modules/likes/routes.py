import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from vtboard.core.dependencies import BoardSession, board_url, get_vtuber_filter, require_login
from vtboard.modules.likes.service import LikeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["likes"])


@router.post("/{post_id}/like")
async def toggle_like(
    post_id: str,
    board: BoardSession = Depends(require_login),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Like or unlike a post, then reload the feed"""
    liked = LikeService(board.supabase).toggle_like(post_id, board.user_id)
    logger.debug(f"User {board.user_id} {'liked' if liked else 'unliked'} post {post_id}")
    return RedirectResponse(board_url(vtuber_filter), status_code=303)
