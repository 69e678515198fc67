import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from supabase import Client

from vtboard.core.dependencies import BoardSession, board_url, get_board_session, get_vtuber_filter
from vtboard.core.session import flash
from vtboard.database.supabase_client import get_supabase
from vtboard.modules.auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(request: Request, supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase, request.session)


@router.get("/login")
async def login(request: Request, service: AuthService = Depends(get_auth_service)):
    """Send the browser to the OAuth provider; it comes back to /auth/callback"""
    url = service.start_sign_in(str(request.url_for("auth_callback")))
    return RedirectResponse(url, status_code=303)


@router.get("/callback", name="auth_callback")
async def callback(
    request: Request,
    code: Optional[str] = None,
    error_description: Optional[str] = None,
    service: AuthService = Depends(get_auth_service),
):
    """Finish the OAuth flow and store the session tokens"""
    if not code:
        logger.warning(f"OAuth callback without code: {error_description}")
        flash(request.session, "Sign-in was cancelled or failed.")
        return RedirectResponse("/", status_code=303)
    user = service.complete_sign_in(code)
    logger.info(f"User {user.id} signed in")
    return RedirectResponse("/", status_code=303)


@router.post("/logout")
async def logout(
    board: BoardSession = Depends(get_board_session),
    vtuber_filter: Optional[str] = Depends(get_vtuber_filter),
):
    """Sign out and reload the board as an anonymous visitor"""
    board.auth.sign_out()
    return RedirectResponse(board_url(vtuber_filter), status_code=303)
