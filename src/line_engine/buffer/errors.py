"""Errors surfaced by document load and save."""

from __future__ import annotations

import os
from typing import Optional


class DocumentError(RuntimeError):
    """Base class for failures tied to a document's backing file."""

    def __init__(
        self, message: str, *, path: Optional[str | os.PathLike[str]] = None
    ) -> None:
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else None


class DocumentReadError(DocumentError):
    """Raised when a path is missing, unreadable, or not valid UTF-8."""


class DocumentWriteError(DocumentError):
    """Raised when a document has no path or its file cannot be written.

    The document keeps its modified flag so the caller can retry, possibly
    with a different path.
    """


__all__ = ["DocumentError", "DocumentReadError", "DocumentWriteError"]
