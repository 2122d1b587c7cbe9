"""A single editable row of grapheme clusters plus its highlight tags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from line_engine.graphemes import find_match, rfind_match, split_graphemes
from line_engine.highlighting.filetype import HighlightingOptions
from line_engine.highlighting.highlighter import highlight_graphemes
from line_engine.highlighting.types import (
    HighlightType,
    foreground_marker,
    reset_marker,
)

from .state import SearchDirection


@dataclass(frozen=True, slots=True)
class Fragment:
    """Run of display text sharing one highlight tag (``None`` when unhighlighted)."""

    text: str
    highlight: Optional[HighlightType] = None


class Line:
    """One row of a document.

    Columns are grapheme cluster indices. Every mutation drops the cached
    highlight tags; ``highlight`` rebuilds them.
    """

    __slots__ = (
        "_text",
        "_graphemes",
        "highlighting",
        "is_highlighted",
        "_settled_key",
    )

    def __init__(self, text: str = "") -> None:
        self._text = ""
        self._graphemes: List[str] = []
        self.highlighting: List[HighlightType] = []
        self.is_highlighted = False
        self._settled_key: Optional[Tuple[bool, Optional[str]]] = None
        self._set_text(text)

    def __len__(self) -> int:
        return len(self._graphemes)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Line({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._text == other._text

    @property
    def text(self) -> str:
        return self._text

    @property
    def graphemes(self) -> Tuple[str, ...]:
        return tuple(self._graphemes)

    @property
    def has_highlighting(self) -> bool:
        """Tags exist for every cluster, settled or still carrying a comment."""

        return bool(self.highlighting) and len(self.highlighting) == len(
            self._graphemes
        )

    def is_empty(self) -> bool:
        return not self._graphemes

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def _set_text(self, text: str) -> None:
        self._text = text
        self._graphemes = split_graphemes(text)
        self.unhighlight()

    def unhighlight(self) -> None:
        self.highlighting = []
        self.is_highlighted = False
        self._settled_key = None

    # -- rendering -----------------------------------------------------

    def _visible_range(self, start: int, end: int) -> Tuple[int, int]:
        end = max(0, min(end, len(self._graphemes)))
        start = max(0, min(start, end))
        return start, end

    def render_fragments(self, start: int, end: int) -> List[Fragment]:
        """Group the clusters in ``[start, end)`` into same-tag runs.

        Tabs are shown as a single space.
        """

        start, end = self._visible_range(start, end)
        tags: Sequence[Optional[HighlightType]]
        if self.has_highlighting:
            tags = self.highlighting
        else:
            tags = [None] * len(self._graphemes)

        fragments: List[Fragment] = []
        run: List[str] = []
        current: Optional[HighlightType] = None
        for index in range(start, end):
            tag = tags[index]
            if run and tag != current:
                fragments.append(Fragment("".join(run), current))
                run = []
            current = tag
            cluster = self._graphemes[index]
            run.append(" " if cluster == "\t" else cluster)
        if run:
            fragments.append(Fragment("".join(run), current))
        return fragments

    def render(self, start: int, end: int) -> str:
        """Printable slice with ANSI colour markers at each tag change."""

        fragments = self.render_fragments(start, end)
        if not self.has_highlighting:
            return "".join(fragment.text for fragment in fragments)
        parts = []
        for fragment in fragments:
            if fragment.highlight is not None:
                parts.append(foreground_marker(fragment.highlight))
            parts.append(fragment.text)
        parts.append(reset_marker())
        return "".join(parts)

    # -- editing -------------------------------------------------------

    def insert(self, at: int, text: str) -> None:
        """Insert ``text`` before cluster ``at``.

        Past the end appends; a negative index is ignored.
        """

        if at < 0:
            return
        if at >= len(self._graphemes):
            self._set_text(self._text + text)
            return
        head = "".join(self._graphemes[:at])
        tail = "".join(self._graphemes[at:])
        self._set_text(head + text + tail)

    def delete(self, at: int) -> None:
        if at < 0 or at >= len(self._graphemes):
            return
        remaining = self._graphemes[:at] + self._graphemes[at + 1 :]
        self._set_text("".join(remaining))

    def split(self, at: int) -> "Line":
        """Keep the first ``at`` clusters and return the rest as a new line."""

        at = max(at, 0)
        remainder = Line("".join(self._graphemes[at:]))
        self._set_text("".join(self._graphemes[:at]))
        return remainder

    def append(self, other: "Line") -> None:
        self._set_text(self._text + other._text)
        other._set_text("")

    # -- search & highlight --------------------------------------------

    def find(
        self,
        query: str,
        at: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Cluster index of ``query`` searching from column ``at``.

        Forward matches start at or after ``at``; backward matches lie wholly
        before it.
        """

        if not query or at < 0 or at > len(self._graphemes):
            return None
        if direction is SearchDirection.FORWARD:
            found = find_match(self._graphemes[at:], query)
            return None if found is None else at + found
        return rfind_match(self._graphemes[:at], query)

    def highlight(
        self,
        options: HighlightingOptions,
        word: Optional[str] = None,
        start_with_comment: bool = False,
    ) -> bool:
        """Recompute tags unless already settled; return the block-comment carry."""

        word = word or None
        key = (start_with_comment, word)
        if self.is_highlighted and word is None and self._settled_key == key:
            if not self._ends_in_open_comment(options):
                return False

        tags, in_comment = highlight_graphemes(
            self._graphemes, options, word, start_with_comment
        )
        self.highlighting = tags
        if in_comment:
            self.is_highlighted = False
            self._settled_key = None
        else:
            self.is_highlighted = True
            self._settled_key = key
        return in_comment

    def _ends_in_open_comment(self, options: HighlightingOptions) -> bool:
        if not self.highlighting:
            return False
        if self.highlighting[-1] is not HighlightType.MULTILINE_COMMENT:
            return False
        closing = split_graphemes(options.multiline_comment_end)
        return self._graphemes[-len(closing) :] != closing


__all__ = ["Fragment", "Line"]
