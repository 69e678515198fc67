import logging
from typing import Any, MutableMapping, Optional

from supabase import Client

from vtboard.config import settings
from vtboard.core.errors import RemoteOperationFailed
from vtboard.core.session import clear_tokens, get_tokens, store_tokens
from vtboard.modules.auth.schemas import SessionUser

logger = logging.getLogger(__name__)


def to_session_user(user: Any) -> SessionUser:
    return SessionUser(
        id=str(user.id),
        email=user.email,
        user_metadata=user.user_metadata or {},
    )


class AuthService:
    def __init__(self, supabase: Client, session: MutableMapping[str, Any]):
        self.supabase = supabase
        self.session = session
        self.supabase.auth.on_auth_state_change(self._on_auth_state_change)

    def _on_auth_state_change(self, event: str, auth_session: Any) -> None:
        """Mirror token changes reported by the auth client into the session cookie."""
        if event == "SIGNED_OUT" or auth_session is None:
            clear_tokens(self.session)
        elif event in ("SIGNED_IN", "TOKEN_REFRESHED"):
            store_tokens(self.session, auth_session.access_token, auth_session.refresh_token)

    def resolve_user(self) -> Optional[SessionUser]:
        """Return the signed-in user for this browser, or None."""
        tokens = get_tokens(self.session)
        if tokens is None:
            return None
        try:
            response = self.supabase.auth.set_session(*tokens)
        except Exception as e:
            logger.info(f"Stored session rejected, treating visitor as signed out: {e}")
            clear_tokens(self.session)
            return None
        if not response or not response.user:
            clear_tokens(self.session)
            return None
        return to_session_user(response.user)

    def start_sign_in(self, redirect_to: str) -> str:
        """Return the provider URL the browser should be sent to."""
        try:
            response = self.supabase.auth.sign_in_with_oauth({
                "provider": settings.oauth_provider,
                "options": {"redirect_to": redirect_to},
            })
        except Exception as e:
            logger.warning(f"Failed to start {settings.oauth_provider} sign-in: {e}")
            raise RemoteOperationFailed("Could not start sign-in.")
        return response.url

    def complete_sign_in(self, auth_code: str) -> SessionUser:
        try:
            response = self.supabase.auth.exchange_code_for_session({"auth_code": auth_code})
        except Exception as e:
            logger.warning(f"OAuth code exchange failed: {e}")
            raise RemoteOperationFailed("Sign-in failed.")
        if not response or not response.session or not response.user:
            raise RemoteOperationFailed("Sign-in failed.")
        store_tokens(self.session, response.session.access_token, response.session.refresh_token)
        return to_session_user(response.user)

    def sign_out(self) -> None:
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            raise RemoteOperationFailed("Sign-out failed.")
        clear_tokens(self.session)
