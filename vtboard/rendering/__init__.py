from vtboard.rendering.renderer import (
    format_timestamp,
    path_segment,
    render_board,
    render_config_error,
    render_confirm,
    safe_href,
)

__all__ = [
    "format_timestamp",
    "path_segment",
    "render_board",
    "render_config_error",
    "render_confirm",
    "safe_href",
]
