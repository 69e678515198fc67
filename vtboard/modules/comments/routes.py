from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from typing import Optional

from vtboard.core.dependencies import BoardSession, board_url, get_board_session, get_vtuber_filter
from vtboard.core.session import clear_draft, comment_draft, save_draft
from vtboard.modules.comments.service import CommentService

router = APIRouter(prefix="/posts", tags=["comments"])


@router.post("/{post_id}/comments")
async def add_comment(
    request: Request,
    post_id: str,
    body: str = Form(""),
    board: BoardSession = Depends(get_board_session),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Comment on a post (requires sign-in and a non-empty body)"""
    draft = comment_draft(post_id)
    save_draft(request.session, draft, {"body": body})
    user = board.require_user()
    CommentService(board.supabase).add_comment(post_id, user.id, body)
    clear_draft(request.session, draft)
    return RedirectResponse(board_url(vtuber_filter), status_code=303)
