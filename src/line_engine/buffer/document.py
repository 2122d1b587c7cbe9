"""Ordered collection of lines backed by an optional file."""

from __future__ import annotations

import os
from typing import Iterator, List, Optional, Sequence

from line_engine.highlighting.filetype import FileType
from line_engine.runtime import telemetry

from .errors import DocumentReadError, DocumentWriteError
from .line import Line
from .state import Position, SearchDirection

PathLike = str | os.PathLike[str]


def split_lines(text: str) -> List[str]:
    """Split file contents on ``\\n`` (dropping a trailing ``\\r``).

    A final newline terminates the last line rather than opening a new one,
    and empty contents produce no lines at all.
    """

    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Document:
    """Lines of text plus the file they came from.

    Edits take a ``Position`` and never raise for out-of-range coordinates;
    they are either clamped or ignored. Highlighting is computed lazily
    through ``highlight`` and invalidated from the edited line downward.
    """

    def __init__(
        self,
        lines: Optional[Sequence[str]] = None,
        *,
        path: Optional[PathLike] = None,
    ) -> None:
        self._lines: List[Line] = [Line(text) for text in lines or ()]
        self.source_path: Optional[str] = os.fspath(path) if path is not None else None
        self.file_type = FileType.from_path(self.source_path)
        self._modified = False

    @classmethod
    def open(cls, path: PathLike) -> "Document":
        document = cls()
        document.load(path)
        return document

    # -- accessors -----------------------------------------------------

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_modified(self) -> bool:
        return self._modified

    @property
    def file_type_name(self) -> str:
        return self.file_type.name

    @property
    def text(self) -> str:
        return "".join(f"{line.text}\n" for line in self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    # -- persistence ---------------------------------------------------

    def load(self, path: PathLike) -> None:
        """Replace the contents with ``path``'s lines.

        Raises ``DocumentReadError`` and leaves the document untouched when the
        file is missing, unreadable, or not UTF-8.
        """

        filename = os.fspath(path)
        with telemetry.span(
            "document::load", component="document", metadata={"path": filename}
        ) as handle:
            try:
                with open(filename, encoding="utf-8", newline="") as stream:
                    contents = stream.read()
            except (OSError, UnicodeDecodeError) as exc:
                telemetry.record_event(
                    "document.read_error",
                    level="error",
                    data={"path": filename, "error": str(exc)},
                )
                raise DocumentReadError(
                    f"Could not open file - {filename}", path=filename
                ) from exc

            self._lines = [Line(text) for text in split_lines(contents)]
            self.source_path = filename
            self.file_type = FileType.from_path(filename)
            self._modified = False
            handle.add_metadata("lines", len(self._lines))

        telemetry.record_event(
            "document.load",
            data={
                "path": filename,
                "lines": len(self._lines),
                "file_type": self.file_type.name,
            },
        )

    def save(self, path: Optional[PathLike] = None) -> None:
        """Write every line followed by ``\\n`` to ``path`` or ``source_path``.

        ``path`` acts as save-as and becomes the new ``source_path``; the file
        type is re-derived from it. On failure ``DocumentWriteError`` is raised
        and the modified flag is left alone.
        """

        filename = os.fspath(path) if path is not None else self.source_path
        if filename is None:
            telemetry.record_event("document.write_error", level="error", data={})
            raise DocumentWriteError("Need a file name to save!")

        with telemetry.span(
            "document::save", component="document", metadata={"path": filename}
        ):
            try:
                with open(filename, "w", encoding="utf-8", newline="") as stream:
                    for line in self._lines:
                        stream.write(line.text)
                        stream.write("\n")
            except OSError as exc:
                telemetry.record_event(
                    "document.write_error",
                    level="error",
                    data={"path": filename, "error": str(exc)},
                )
                raise DocumentWriteError(
                    f"There was an error saving {filename}", path=filename
                ) from exc
            self.source_path = filename
            self.file_type = FileType.from_path(filename)
            self._modified = False

        telemetry.record_event(
            "document.save", data={"path": filename, "lines": len(self._lines)}
        )

    # -- editing -------------------------------------------------------

    def insert(self, at: Position, text: str) -> None:
        """Insert ``text`` at ``at``; a newline splits the line instead."""

        if at.y < 0 or at.x < 0 or at.y > len(self._lines):
            return
        if text == "\n":
            self.insert_newline(at)
            return

        self._modified = True
        if at.y == len(self._lines):
            line = Line()
            line.insert(0, text)
            self._lines.append(line)
        else:
            self._lines[at.y].insert(at.x, text)
        self._unhighlight_from(at.y)

    insert_char = insert

    def insert_newline(self, at: Position) -> None:
        """Split line ``y`` at ``x``; on or past the last line append an empty line."""

        if at.y < 0 or at.x < 0 or at.y > len(self._lines):
            return

        self._modified = True
        if at.y >= len(self._lines) - 1:
            self._lines.append(Line())
        else:
            remainder = self._lines[at.y].split(at.x)
            self._lines.insert(at.y + 1, remainder)
        self._unhighlight_from(at.y)

    def delete(self, at: Position) -> None:
        """Delete the cluster at ``at``, or join the next line when at end-of-line."""

        if at.y < 0 or at.x < 0 or at.y >= len(self._lines):
            return

        self._modified = True
        current = self._lines[at.y]
        if at.x == len(current) and at.y + 1 < len(self._lines):
            current.append(self._lines.pop(at.y + 1))
        else:
            current.delete(at.x)
        self._unhighlight_from(max(at.y - 1, 0))

    def _unhighlight_from(self, start: int) -> None:
        for line in self._lines[start:]:
            line.unhighlight()

    # -- search & highlight --------------------------------------------

    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Search line by line from ``at`` without wrapping past either end.

        Each line after the first is searched from column 0 (forward) or from
        its end (backward).
        """

        if not query or at.y < 0 or at.y >= len(self._lines):
            return None

        if direction is SearchDirection.FORWARD:
            column = at.x
            for y in range(at.y, len(self._lines)):
                x = self._lines[y].find(query, column, direction)
                if x is not None:
                    return Position(x=x, y=y)
                column = 0
            return None

        column = at.x
        for y in range(at.y, -1, -1):
            x = self._lines[y].find(query, column, direction)
            if x is not None:
                return Position(x=x, y=y)
            if y > 0:
                column = len(self._lines[y - 1])
        return None

    def highlight(
        self, word: Optional[str] = None, until: Optional[int] = None
    ) -> None:
        """Highlight lines ``0..until`` inclusive (all lines when ``until`` is None)."""

        end = len(self._lines)
        if until is not None:
            end = max(0, min(until + 1, end))
        options = self.file_type.highlighting_options()
        with telemetry.span(
            "document::highlight",
            component="highlighter",
            metadata={"until": end, "file_type": self.file_type.name},
            profile=telemetry.current_settings().profile_highlight,
        ):
            start_with_comment = False
            for line in self._lines[:end]:
                start_with_comment = line.highlight(options, word, start_with_comment)


__all__ = ["Document", "split_lines"]
