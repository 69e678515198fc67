from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from typing import Optional

from vtboard.core.dependencies import (
    BoardSession, board_url, filtered_url, get_board_session, get_vtuber_filter, require_login
)
from vtboard.core.session import clear_draft, save_draft
from vtboard.modules.vtubers.service import VtuberService
from vtboard.rendering import path_segment, render_confirm

router = APIRouter(prefix="/vtubers", tags=["vtubers"])

DRAFT = "vtuber"


@router.post("")
async def add_vtuber(
    request: Request,
    name: str = Form(""),
    channel_url: str = Form(""),
    board: BoardSession = Depends(get_board_session),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Register a streamer (requires sign-in and a name)"""
    save_draft(request.session, DRAFT, {"name": name, "channel_url": channel_url})
    board.require_user()
    VtuberService(board.supabase).create_vtuber(name, channel_url)
    clear_draft(request.session, DRAFT)
    return RedirectResponse(board_url(vtuber_filter), status_code=303)


@router.get("/{vtuber_id}/delete", response_class=HTMLResponse)
async def confirm_delete_vtuber(
    vtuber_id: str,
    board: BoardSession = Depends(require_login),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Ask before deleting; linked posts are kept"""
    return HTMLResponse(render_confirm(
        "Delete this streamer? Posts linked to it will stay.",
        action=filtered_url(f"/vtubers/{path_segment(vtuber_id)}/delete", vtuber_filter),
        cancel=board_url(vtuber_filter),
    ))


@router.post("/{vtuber_id}/delete")
async def delete_vtuber(
    vtuber_id: str,
    confirmed: str = Form(""),
    board: BoardSession = Depends(require_login),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Delete a streamer row only; its posts stay with a stale reference"""
    if confirmed != "yes":
        return RedirectResponse(
            filtered_url(f"/vtubers/{path_segment(vtuber_id)}/delete", vtuber_filter), status_code=303
        )
    VtuberService(board.supabase).delete_vtuber(vtuber_id)
    if vtuber_filter == vtuber_id:
        vtuber_filter = None
    return RedirectResponse(board_url(vtuber_filter), status_code=303)
