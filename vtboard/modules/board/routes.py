from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from typing import Optional

from vtboard.core.dependencies import BoardSession, get_board_session, get_vtuber_filter
from vtboard.modules.board.service import BoardService
from vtboard.rendering import render_board

router = APIRouter(tags=["board"])


@router.get("/", response_class=HTMLResponse)
async def board_page(
    request: Request,
    board: BoardSession = Depends(get_board_session),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Load streamers and the feed from scratch and render the whole page"""
    state = BoardService(board, request.session).load_state(vtuber_filter)
    return HTMLResponse(render_board(state))
