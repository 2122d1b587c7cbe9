"""Language profiles and the per-line syntax highlighter."""

from .filetype import (
    C,
    PYTHON,
    RUST,
    FileType,
    HighlightingOptions,
    register_file_type,
    registered_extensions,
)
from .highlighter import highlight_graphemes, is_separator, overlay_matches
from .types import HighlightType, foreground_marker, reset_marker

__all__ = [
    "C",
    "FileType",
    "HighlightType",
    "HighlightingOptions",
    "PYTHON",
    "RUST",
    "foreground_marker",
    "highlight_graphemes",
    "is_separator",
    "overlay_matches",
    "register_file_type",
    "registered_extensions",
    "reset_marker",
]
