"""
Core dependencies for resolving the browser's session and guarding actions
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from fastapi import Depends, Request
from supabase import Client

from vtboard.core.errors import LoginRequired
from vtboard.database.supabase_client import get_supabase
from vtboard.modules.auth.schemas import SessionUser
from vtboard.modules.auth.service import AuthService
from vtboard.modules.profiles.schemas import ProfileResponse
from vtboard.modules.profiles.service import ProfileService


@dataclass
class BoardSession:
    supabase: Client
    auth: AuthService
    user: Optional[SessionUser] = None
    profile: Optional[ProfileResponse] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def require_user(self) -> SessionUser:
        if self.user is None:
            raise LoginRequired()
        return self.user


def get_board_session(request: Request, supabase: Client = Depends(get_supabase)) -> BoardSession:
    """Re-derive user and profile from the session cookie on every request"""
    auth = AuthService(supabase, request.session)
    user = auth.resolve_user()
    profile = ProfileService(supabase).ensure_profile(user) if user else None
    return BoardSession(supabase=supabase, auth=auth, user=user, profile=profile)


def require_login(board: BoardSession = Depends(get_board_session)) -> BoardSession:
    """Dependency for actions that need a signed-in user"""
    board.require_user()
    return board


def get_vtuber_filter(vtuber: Optional[str] = None) -> Optional[str]:
    """Currently selected streamer, carried as the ``vtuber`` query parameter"""
    return vtuber or None


def filtered_url(path: str, vtuber_filter: Optional[str] = None) -> str:
    """``path`` carrying the selected streamer along, so redirects keep the filter"""
    if not vtuber_filter:
        return path
    return f"{path}?{urlencode({'vtuber': vtuber_filter})}"


def board_url(vtuber_filter: Optional[str] = None) -> str:
    return filtered_url("/", vtuber_filter)
