"""Cursor positions and search direction shared by lines and documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """A ``(column, line)`` pair measured in grapheme clusters and line indices."""

    x: int = 0
    y: int = 0


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


__all__ = ["Position", "SearchDirection"]
