import logging
from typing import List, Optional

from supabase import Client

from vtboard.core.errors import RemoteOperationFailed, ValidationFailed
from vtboard.modules.vtubers.schemas import VtuberCreate, VtuberResponse

logger = logging.getLogger(__name__)


class VtuberService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_vtubers(self) -> List[VtuberResponse]:
        """All streamers, newest first"""
        try:
            result = self.supabase.table("vtubers")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.warning(f"Failed to load vtubers: {e}")
            raise RemoteOperationFailed("Could not load the streamer list.")
        return [VtuberResponse(**row) for row in (result.data or [])]

    def create_vtuber(self, name: Optional[str], channel_url: Optional[str]) -> None:
        data = VtuberCreate(
            name=(name or "").strip(),
            channel_url=(channel_url or "").strip() or None,
        )
        if not data.name:
            raise ValidationFailed("Enter a streamer name.")
        try:
            self.supabase.table("vtubers").insert(data.model_dump()).execute()
        except Exception as e:
            logger.warning(f"Failed to add vtuber {data.name!r}: {e}")
            raise RemoteOperationFailed(
                "Could not add the streamer. Check your permissions or the row-level security policy."
            )

    def delete_vtuber(self, vtuber_id: str) -> None:
        """Delete the streamer row only; its posts keep a stale reference."""
        try:
            self.supabase.table("vtubers")\
                .delete()\
                .eq("id", vtuber_id)\
                .execute()
        except Exception as e:
            logger.warning(f"Failed to delete vtuber {vtuber_id}: {e}")
            raise RemoteOperationFailed(
                "Could not delete the streamer. Check your permissions or the row-level security policy."
            )
