"""
HTML rendering for the board.

Every function here is a pure projection of its arguments into markup. All
user-supplied text passes through Jinja2 autoescaping; hrefs built from
user input are additionally restricted to http(s) URLs.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote, urlsplit
from zoneinfo import ZoneInfo

from jinja2 import Environment, FileSystemLoader, select_autoescape

from vtboard.config import settings
from vtboard.core.dependencies import filtered_url
from vtboard.core.session import comment_draft
from vtboard.core.state import BoardState

TEMPLATE_DIR = Path(__file__).parent / "templates"


def format_timestamp(value: datetime, tz_name: Optional[str] = None) -> str:
    """Local 24h timestamp, e.g. ``2024. 3. 9. 18:05:00``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    local = value.astimezone(ZoneInfo(tz_name or settings.display_timezone))
    return f"{local.year}. {local.month}. {local.day}. {local:%H:%M:%S}"


def safe_href(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    if urlsplit(url.strip()).scheme.lower() not in ("http", "https"):
        return None
    return url.strip()


def path_segment(value: str) -> str:
    return quote(str(value), safe="")


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["localtime"] = format_timestamp
    env.filters["safe_href"] = safe_href
    env.filters["path_segment"] = path_segment
    env.globals["with_filter"] = filtered_url
    env.globals["comment_draft"] = comment_draft
    env.globals["app_name"] = settings.app_name
    return env


env = _build_environment()


def render_board(state: BoardState) -> str:
    return env.get_template("board.html").render(state=state)


def render_confirm(message: str, action: str, cancel: str) -> str:
    return env.get_template("confirm.html").render(message=message, action=action, cancel=cancel)


def render_config_error(missing: List[str]) -> str:
    return env.get_template("config_error.html").render(missing=missing)
