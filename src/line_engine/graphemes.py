"""Grapheme cluster helpers.

Every column in the engine is a count of extended grapheme clusters. Python
strings index by code point, so anything coming back from ``str.find`` has
to be mapped onto cluster boundaries before it is exposed.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

import regex

_CLUSTER_RE = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    """Segment ``text`` into extended grapheme clusters."""

    if not text:
        return []
    return _CLUSTER_RE.findall(text)


def count_graphemes(text: str) -> int:
    return len(split_graphemes(text))


def boundary_offsets(clusters: Sequence[str]) -> Dict[int, int]:
    """Map the code point offset of every cluster boundary to its cluster index.

    The end of the text is included, so a match ending at the last code point
    still resolves.
    """

    offsets: Dict[int, int] = {}
    running = 0
    for index, cluster in enumerate(clusters):
        offsets[running] = index
        running += len(cluster)
    offsets[running] = len(clusters)
    return offsets


def iter_matches(clusters: Sequence[str], query: str) -> Iterator[Tuple[int, int]]:
    """Yield non-overlapping ``(start, end)`` cluster spans of ``query``, left to right.

    A code point match that starts or ends inside a cluster (the base letter
    of a decomposed ``"é"``, half of a ZWJ emoji sequence) is skipped.
    """

    if not query or not clusters:
        return
    haystack = "".join(clusters)
    boundaries = boundary_offsets(clusters)
    start = 0
    while True:
        offset = haystack.find(query, start)
        if offset < 0:
            return
        end = offset + len(query)
        if offset in boundaries and end in boundaries:
            yield boundaries[offset], boundaries[end]
            start = end
        else:
            start = offset + 1


def rfind_match(clusters: Sequence[str], query: str) -> int | None:
    """Cluster index of the last aligned match of ``query`` in ``clusters``."""

    if not query or not clusters:
        return None
    haystack = "".join(clusters)
    boundaries = boundary_offsets(clusters)
    end = len(haystack)
    while True:
        offset = haystack.rfind(query, 0, end)
        if offset < 0:
            return None
        if offset in boundaries and offset + len(query) in boundaries:
            return boundaries[offset]
        end = offset + len(query) - 1


def find_match(clusters: Sequence[str], query: str) -> int | None:
    """Cluster index of the first aligned match of ``query`` in ``clusters``."""

    for start, _ in iter_matches(clusters, query):
        return start
    return None


__all__ = [
    "boundary_offsets",
    "count_graphemes",
    "find_match",
    "iter_matches",
    "rfind_match",
    "split_graphemes",
]
