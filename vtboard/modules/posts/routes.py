from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from typing import Optional

from vtboard.core.dependencies import (
    BoardSession, board_url, filtered_url, get_board_session, get_vtuber_filter, require_login
)
from vtboard.core.session import clear_draft, comment_draft, save_draft
from vtboard.modules.posts.service import PostService
from vtboard.rendering import path_segment, render_confirm

router = APIRouter(prefix="/posts", tags=["posts"])

DRAFT = "post"


@router.post("")
async def create_post(
    request: Request,
    title: str = Form(""),
    body: str = Form(""),
    board: BoardSession = Depends(get_board_session),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Publish a post under the currently selected streamer (or none)"""
    save_draft(request.session, DRAFT, {"title": title, "body": body})
    user = board.require_user()
    PostService(board.supabase).create_post(user.id, title, body, vtuber_filter)
    clear_draft(request.session, DRAFT)
    return RedirectResponse(board_url(vtuber_filter), status_code=303)


@router.get("/{post_id}/delete", response_class=HTMLResponse)
async def confirm_delete_post(
    post_id: str,
    board: BoardSession = Depends(require_login),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    return HTMLResponse(render_confirm(
        "Delete this post?",
        action=filtered_url(f"/posts/{path_segment(post_id)}/delete", vtuber_filter),
        cancel=board_url(vtuber_filter),
    ))


@router.post("/{post_id}/delete")
async def delete_post(
    request: Request,
    post_id: str,
    confirmed: str = Form(""),
    board: BoardSession = Depends(require_login),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Delete a post; only its author gets past the RLS policy"""
    if confirmed != "yes":
        return RedirectResponse(
            filtered_url(f"/posts/{path_segment(post_id)}/delete", vtuber_filter), status_code=303
        )
    PostService(board.supabase).delete_post(post_id)
    clear_draft(request.session, comment_draft(post_id))
    return RedirectResponse(board_url(vtuber_filter), status_code=303)
