import logging
from typing import Any, List, MutableMapping, Optional

from vtboard.core.dependencies import BoardSession
from vtboard.core.errors import RemoteOperationFailed
from vtboard.core.session import flash, get_drafts, pop_flashes, prune_comment_drafts
from vtboard.core.state import BoardState
from vtboard.modules.feed.service import FeedService
from vtboard.modules.vtubers.schemas import VtuberResponse
from vtboard.modules.vtubers.service import VtuberService

logger = logging.getLogger(__name__)


def resolve_filter(requested: Optional[str], vtubers: List[VtuberResponse], loaded: bool) -> Optional[str]:
    """Keep the requested filter only if it still names a listed streamer."""
    if not requested:
        return None
    if loaded and not any(v.id == requested for v in vtubers):
        return None
    return requested


class BoardService:
    def __init__(self, board: BoardSession, session: MutableMapping[str, Any]):
        self.board = board
        self.session = session

    def load_state(self, vtuber_filter: Optional[str] = None) -> BoardState:
        """Fetch every list the page shows. A failed list is flashed and left empty."""
        state = BoardState(user=self.board.user, profile=self.board.profile)

        loaded = False
        try:
            state.vtubers = VtuberService(self.board.supabase).list_vtubers()
            loaded = True
        except RemoteOperationFailed as e:
            flash(self.session, e.message)
        state.vtuber_filter = resolve_filter(vtuber_filter, state.vtubers, loaded)

        try:
            state.posts = FeedService(self.board.supabase).load_feed(
                self.board.user_id, state.vtuber_filter
            )
            # Only the unfiltered feed lists every post.
            if state.vtuber_filter is None:
                prune_comment_drafts(self.session, [post.id for post in state.posts])
        except RemoteOperationFailed as e:
            flash(self.session, e.message)

        state.flashes = pop_flashes(self.session)
        state.drafts = get_drafts(self.session)
        return state
