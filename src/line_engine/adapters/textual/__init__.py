"""Textual/Rich rendering bridge."""

from .rendering import (
    DocumentView,
    document_to_text,
    fragments_to_text,
    line_to_text,
    style_for,
)

__all__ = [
    "DocumentView",
    "document_to_text",
    "fragments_to_text",
    "line_to_text",
    "style_for",
]
