"""Line and document structures for the editing core."""

from .document import Document, split_lines
from .errors import DocumentError, DocumentReadError, DocumentWriteError
from .line import Fragment, Line
from .state import Position, SearchDirection

__all__ = [
    "Document",
    "DocumentError",
    "DocumentReadError",
    "DocumentWriteError",
    "Fragment",
    "Line",
    "Position",
    "SearchDirection",
    "split_lines",
]
