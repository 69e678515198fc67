"""
Helpers over the signed browser session (``request.session``).

The cookie holds only what must outlive one request: the auth token pair,
pending flash messages, and form drafts kept after a failed submission.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, MutableMapping, Optional, Tuple

logger = logging.getLogger(__name__)

TOKENS_KEY = "auth_tokens"
FLASH_KEY = "flash"
DRAFTS_KEY = "drafts"

COOKIE_LIMIT = 4096
# Signature, timestamp, cookie attributes and a couple of flash messages.
COOKIE_RESERVE = 512


def get_tokens(session: MutableMapping[str, Any]) -> Optional[Tuple[str, str]]:
    tokens = session.get(TOKENS_KEY)
    if not tokens or not tokens.get("access_token") or not tokens.get("refresh_token"):
        return None
    return tokens["access_token"], tokens["refresh_token"]


def store_tokens(session: MutableMapping[str, Any], access_token: str, refresh_token: str) -> None:
    session[TOKENS_KEY] = {"access_token": access_token, "refresh_token": refresh_token}


def clear_tokens(session: MutableMapping[str, Any]) -> None:
    session.pop(TOKENS_KEY, None)


def flash(session: MutableMapping[str, Any], message: str, level: str = "error") -> None:
    messages = list(session.get(FLASH_KEY, []))
    messages.append({"level": level, "message": message})
    session[FLASH_KEY] = messages


def pop_flashes(session: MutableMapping[str, Any]) -> List[Dict[str, str]]:
    return session.pop(FLASH_KEY, [])


def comment_draft(post_id: str) -> str:
    return f"comment:{post_id}"


def _encoded_size(value: Any) -> int:
    # Same encoding SessionMiddleware applies before base64 and signing.
    return len(json.dumps(value))


def draft_room(session: MutableMapping[str, Any]) -> int:
    """JSON bytes left for drafts once everything else in the cookie is counted."""
    others = {key: value for key, value in session.items() if key != DRAFTS_KEY}
    used = _encoded_size(others) + _encoded_size({DRAFTS_KEY: None})
    return (COOKIE_LIMIT - COOKIE_RESERVE) * 3 // 4 - used


def _fit(form: str, values: Dict[str, str], room: int) -> Dict[str, str]:
    """Cut the longest fields first, keeping the longest prefix that still fits."""
    values = dict(values)
    for name in sorted(values, key=lambda field: len(values[field]), reverse=True):
        if _encoded_size({form: values}) <= room:
            break
        text = values[name]
        low, high = 0, len(text)
        while low < high:
            middle = (low + high + 1) // 2
            values[name] = text[:middle]
            if _encoded_size({form: values}) <= room:
                low = middle
            else:
                high = middle - 1
        values[name] = text[:low]
    return values


def save_draft(session: MutableMapping[str, Any], form: str, values: Dict[str, str]) -> None:
    """
    Remember what the user typed into ``form`` until the action succeeds.

    Drafts share the cookie with the token pair and browsers drop cookies
    over 4096 bytes, so drafts get only the room left in it. The draft for
    ``form`` is cut to fit first; older drafts stay only while they fit.
    """
    room = draft_room(session)
    fitted = _fit(form, values, room)
    if fitted != values:
        logger.info("Draft for %s cut to fit the session cookie", form)
        flash(session, "Your text was too long to keep in full.")
        room = draft_room(session)

    drafts = {form: fitted} if _encoded_size({form: fitted}) <= room else {}
    for name, older in session.get(DRAFTS_KEY, {}).items():
        if name != form and _encoded_size({**drafts, name: older}) <= room:
            drafts[name] = older

    if drafts:
        session[DRAFTS_KEY] = drafts
    else:
        session.pop(DRAFTS_KEY, None)


def prune_comment_drafts(session: MutableMapping[str, Any], post_ids: Iterable[str]) -> None:
    """Drop comment drafts for posts that are no longer on the board."""
    keep = {comment_draft(post_id) for post_id in post_ids}
    drafts = dict(session.get(DRAFTS_KEY, {}))
    stale = [name for name in drafts if name.startswith("comment:") and name not in keep]
    if not stale:
        return
    for name in stale:
        del drafts[name]
    if drafts:
        session[DRAFTS_KEY] = drafts
    else:
        session.pop(DRAFTS_KEY, None)


def clear_draft(session: MutableMapping[str, Any], form: str) -> None:
    drafts = dict(session.get(DRAFTS_KEY, {}))
    if drafts.pop(form, None) is not None:
        session[DRAFTS_KEY] = drafts


def get_drafts(session: MutableMapping[str, Any]) -> Dict[str, Dict[str, str]]:
    return dict(session.get(DRAFTS_KEY, {}))
