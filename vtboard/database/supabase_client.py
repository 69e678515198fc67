import logging
from typing import Any, MutableMapping, Optional

from fastapi import Request
from supabase import create_client, Client, ClientOptions
from supabase_auth import SyncSupportedStorage

from vtboard.config import settings
from vtboard.core.errors import ConfigurationMissing

logger = logging.getLogger(__name__)

STORAGE_KEY = "supabase"


class SessionStorage(SyncSupportedStorage):
    """Auth storage backed by the signed browser session.

    The auth client keeps its PKCE code verifier here between the sign-in
    redirect and the callback, so it has to survive across requests.
    """

    def __init__(self, session: MutableMapping[str, Any]):
        self.session = session

    def _items(self) -> dict:
        return dict(self.session.get(STORAGE_KEY, {}))

    def get_item(self, key: str) -> Optional[str]:
        return self._items().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._items()
        items[key] = value
        self.session[STORAGE_KEY] = items

    def remove_item(self, key: str) -> None:
        items = self._items()
        if items.pop(key, None) is not None:
            self.session[STORAGE_KEY] = items


class SupabaseClient:
    @classmethod
    def check_settings(cls) -> None:
        missing = settings.missing_required()
        if missing:
            raise ConfigurationMissing(missing)

    @classmethod
    def create_session_client(cls, session: MutableMapping[str, Any]) -> Client:
        """Client bound to one browser session; RLS applies to whoever is signed in."""
        cls.check_settings()
        options = ClientOptions(
            storage=SessionStorage(session),
            flow_type="pkce",
            auto_refresh_token=False,
            persist_session=False,
        )
        return create_client(settings.supabase_url.strip(), settings.supabase_key.strip(), options)


def get_supabase(request: Request) -> Client:
    return SupabaseClient.create_session_client(request.session)
