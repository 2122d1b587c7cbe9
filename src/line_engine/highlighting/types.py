"""Highlight categories assigned to each grapheme cluster."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from rich.color import Color

Rgb = Tuple[int, int, int]


class HighlightType(str, Enum):
    NONE = "none"
    NUMBER = "number"
    MATCH = "match"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    MULTILINE_COMMENT = "multiline_comment"
    PRIMARY_KEYWORDS = "primary_keywords"
    SECONDARY_KEYWORDS = "secondary_keywords"

    def to_rgb(self) -> Rgb:
        return _PALETTE.get(self, (255, 255, 255))

    def to_color(self) -> Color:
        return Color.from_rgb(*self.to_rgb())


_PALETTE = {
    HighlightType.NUMBER: (220, 163, 163),
    HighlightType.MATCH: (38, 139, 210),
    HighlightType.STRING: (211, 54, 130),
    HighlightType.CHARACTER: (108, 113, 196),
    HighlightType.COMMENT: (133, 153, 0),
    HighlightType.MULTILINE_COMMENT: (133, 153, 0),
    HighlightType.PRIMARY_KEYWORDS: (181, 137, 0),
    HighlightType.SECONDARY_KEYWORDS: (42, 161, 152),
}


def foreground_marker(highlight: HighlightType) -> str:
    """ANSI escape that switches the foreground to ``highlight``'s colour."""

    codes = highlight.to_color().get_ansi_codes(foreground=True)
    return f"\x1b[{';'.join(codes)}m"


def reset_marker() -> str:
    codes = Color.default().get_ansi_codes(foreground=True)
    return f"\x1b[{';'.join(codes)}m"


__all__ = ["HighlightType", "Rgb", "foreground_marker", "reset_marker"]
