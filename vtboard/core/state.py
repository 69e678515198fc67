from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vtboard.modules.auth.schemas import SessionUser
from vtboard.modules.feed.schemas import FeedPost
from vtboard.modules.profiles.schemas import ProfileResponse
from vtboard.modules.vtubers.schemas import VtuberResponse


@dataclass
class BoardState:
    """Everything one board page shows, as last fetched from Supabase.

    Built from scratch for every page load and handed to the renderer whole;
    nothing patches it locally.
    """
    user: Optional[SessionUser] = None
    profile: Optional[ProfileResponse] = None
    vtubers: List[VtuberResponse] = field(default_factory=list)
    posts: List[FeedPost] = field(default_factory=list)
    vtuber_filter: Optional[str] = None
    flashes: List[Dict[str, str]] = field(default_factory=list)
    drafts: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @property
    def current_user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def draft(self, form: str, name: str) -> str:
        return self.drafts.get(form, {}).get(name, "")
