"""Per-line syntax classification.

``highlight_graphemes`` is a pure function of one line's clusters, the
language profile, the active search word, and whether the previous line
ended inside an unterminated block comment. Documents fold it over their
lines, feeding each call's returned carry into the next one.
"""

from __future__ import annotations

import string
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from line_engine.graphemes import iter_matches, split_graphemes

from .filetype import HighlightingOptions
from .types import HighlightType

_PUNCTUATION = frozenset(string.punctuation) - {"_"}
_DIGITS = frozenset(string.digits)


def is_separator(cluster: str) -> bool:
    return cluster.isspace() or cluster in _PUNCTUATION


def _is_alnum(cluster: str) -> bool:
    return cluster[:1].isalnum()


@lru_cache(maxsize=64)
def _clusters(text: str) -> Tuple[str, ...]:
    return tuple(split_graphemes(text))


class _LineScanner:
    """Left-to-right scan over one line; each ``_scan_*`` either claims or declines."""

    def __init__(self, graphemes: Sequence[str], options: HighlightingOptions) -> None:
        self.graphemes = graphemes
        self.options = options
        self.tags: List[HighlightType] = []
        self.index = 0

    @property
    def length(self) -> int:
        return len(self.graphemes)

    def run(self, start_with_comment: bool) -> bool:
        in_comment = False
        opts = self.options
        if start_with_comment and opts.multiline_comments:
            in_comment = not self._consume_block_comment(search_from=0)

        while self.index < self.length:
            if self._scan_character():
                continue
            opened = self._scan_block_comment_open()
            if opened is not None:
                in_comment = not opened
                continue
            if self._scan_line_comment():
                break
            if self._scan_keywords(
                opts.primary_keywords, HighlightType.PRIMARY_KEYWORDS
            ) or self._scan_keywords(
                opts.secondary_keywords, HighlightType.SECONDARY_KEYWORDS
            ):
                continue
            if self._scan_number() or self._scan_string():
                continue
            self._tag(HighlightType.NONE, 1)
        return in_comment

    def _tag(self, highlight: HighlightType, count: int) -> None:
        self.tags.extend([highlight] * count)
        self.index += count

    def _matches_at(self, index: int, needle: Sequence[str]) -> bool:
        if not needle:
            return False
        return tuple(self.graphemes[index : index + len(needle)]) == tuple(needle)

    def _find(self, needle: Sequence[str], start: int) -> Optional[int]:
        for index in range(start, self.length - len(needle) + 1):
            if self._matches_at(index, needle):
                return index
        return None

    def _consume_block_comment(self, *, search_from: int) -> bool:
        """Tag through the closing delimiter; return whether it was found."""

        closing = _clusters(self.options.multiline_comment_end)
        found = self._find(closing, search_from)
        end = self.length if found is None else found + len(closing)
        self._tag(HighlightType.MULTILINE_COMMENT, end - self.index)
        return found is not None

    def _scan_character(self) -> bool:
        if not self.options.characters or self.graphemes[self.index] != "'":
            return False
        if self.index + 1 >= self.length:
            return False
        offset = 3 if self.graphemes[self.index + 1] == "\\" else 2
        closing = self.index + offset
        if closing < self.length and self.graphemes[closing] == "'":
            self._tag(HighlightType.CHARACTER, offset + 1)
            return True
        return False

    def _scan_block_comment_open(self) -> Optional[bool]:
        if not self.options.multiline_comments:
            return None
        opening = _clusters(self.options.multiline_comment_start)
        if not self._matches_at(self.index, opening):
            return None
        return self._consume_block_comment(search_from=self.index + len(opening))

    def _scan_line_comment(self) -> bool:
        if not self.options.comments:
            return False
        if not self._matches_at(self.index, _clusters(self.options.comment_start)):
            return False
        self._tag(HighlightType.COMMENT, self.length - self.index)
        return True

    def _scan_keywords(
        self, keywords: Sequence[str], highlight: HighlightType
    ) -> bool:
        if self.index > 0 and not is_separator(self.graphemes[self.index - 1]):
            return False
        for keyword in keywords:
            needle = _clusters(keyword)
            if not self._matches_at(self.index, needle):
                continue
            end = self.index + len(needle)
            if end < self.length and not is_separator(self.graphemes[end]):
                continue
            self._tag(highlight, len(needle))
            return True
        return False

    def _scan_number(self) -> bool:
        if not self.options.numbers or self.graphemes[self.index] not in _DIGITS:
            return False
        if self.index > 0 and _is_alnum(self.graphemes[self.index - 1]):
            return False
        end = self.index + 1
        while end < self.length and (
            self.graphemes[end] in _DIGITS or self.graphemes[end] == "."
        ):
            end += 1
        self._tag(HighlightType.NUMBER, end - self.index)
        return True

    def _scan_string(self) -> bool:
        if not self.options.strings or self.graphemes[self.index] != '"':
            return False
        end = self.index + 1
        while end < self.length:
            cluster = self.graphemes[end]
            end += 1
            if cluster == "\\":
                end = min(end + 1, self.length)
            elif cluster == '"':
                break
        self._tag(HighlightType.STRING, end - self.index)
        return True


def overlay_matches(
    graphemes: Sequence[str], tags: List[HighlightType], word: Optional[str]
) -> None:
    """Retag every occurrence of ``word`` as ``MATCH`` in place."""

    if not word:
        return
    for start, end in iter_matches(graphemes, word):
        tags[start:end] = [HighlightType.MATCH] * (end - start)


def highlight_graphemes(
    graphemes: Sequence[str],
    options: HighlightingOptions,
    word: Optional[str] = None,
    start_with_comment: bool = False,
) -> Tuple[List[HighlightType], bool]:
    """Classify one line.

    Returns one tag per cluster and whether the line ends inside an open
    block comment.
    """

    scanner = _LineScanner(graphemes, options)
    in_comment = scanner.run(start_with_comment)
    overlay_matches(graphemes, scanner.tags, word)
    return scanner.tags, in_comment


__all__ = ["highlight_graphemes", "is_separator", "overlay_matches"]
