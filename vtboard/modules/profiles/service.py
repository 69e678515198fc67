import logging
from typing import Optional

from supabase import Client

from vtboard.modules.auth.schemas import SessionUser
from vtboard.modules.profiles.schemas import ProfileCreate, ProfileResponse

logger = logging.getLogger(__name__)

FALLBACK_NICKNAME = "user"


def derive_nickname(user: SessionUser) -> str:
    """Best display name the provider gave us, else the email's local part."""
    metadata = user.user_metadata or {}
    for key in ("name", "full_name", "nickname"):
        if metadata.get(key):
            return metadata[key]
    if user.email:
        return user.email.split("@")[0]
    return FALLBACK_NICKNAME


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Get profile by user ID; raises on remote errors"""
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return ProfileResponse(**result.data[0])

    def ensure_profile(self, user: SessionUser) -> Optional[ProfileResponse]:
        """Look the profile up, creating it on first sight. Errors mean "no profile"."""
        try:
            profile = self.get_profile(user.id)
        except Exception as e:
            logger.warning(f"Profile lookup failed for {user.id}: {e}")
            profile = None
        if profile:
            return profile

        data = ProfileCreate(
            id=user.id,
            nickname=derive_nickname(user),
            avatar_url=(user.user_metadata or {}).get("avatar_url") or None,
        )
        try:
            result = self.supabase.table("profiles").insert(data.model_dump()).execute()
        except Exception as e:
            logger.warning(f"Profile insert failed for {user.id}: {e}")
            return None
        if not result.data:
            logger.warning(f"Profile insert for {user.id} returned no row")
            return None
        logger.info(f"Created profile for {user.id}")
        return ProfileResponse(**result.data[0])
