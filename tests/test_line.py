from __future__ import annotations

import random

import pytest

from line_engine.buffer import Line, SearchDirection
from line_engine.graphemes import split_graphemes
from line_engine.highlighting import (
    RUST,
    HighlightType,
    foreground_marker,
    reset_marker,
)

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
WAVE = "\U0001F44B\U0001F3FD"
FLAG = "\U0001F1EF\U0001F1F5"
DECOMPOSED_E = "e\u0301"

CLUSTER_POOL = ["a", "é", DECOMPOSED_E, WAVE, FLAG, FAMILY, "\t", "字", " "]


def make_line(*clusters: str) -> Line:
    return Line("".join(clusters))


def test_length_counts_grapheme_clusters() -> None:
    line = make_line("a", FAMILY, DECOMPOSED_E, FLAG, WAVE)

    assert len(line) == 5
    assert line.graphemes == ("a", FAMILY, DECOMPOSED_E, FLAG, WAVE)


def test_empty_line() -> None:
    line = Line()

    assert len(line) == 0
    assert line.is_empty()
    assert line.render(0, 10) == ""


def test_length_tracks_random_edits() -> None:
    rng = random.Random(1234)
    line = Line()
    model: list[str] = []

    for _ in range(300):
        if model and rng.random() < 0.4:
            at = rng.randrange(len(model) + 2)
            line.delete(at)
            if at < len(model):
                del model[at]
        else:
            cluster = rng.choice(CLUSTER_POOL)
            at = rng.randrange(len(model) + 3)
            line.insert(at, cluster)
            model.insert(min(at, len(model)), cluster)

        assert len(line) == len(model)
        assert len(line) == len(split_graphemes(line.text))

    assert line.graphemes == tuple(model)


def test_insert_past_end_appends() -> None:
    line = Line("ab")

    line.insert(99, "c")

    assert line.text == "abc"
    assert len(line) == 3


def test_insert_negative_index_is_ignored() -> None:
    line = Line("ab")

    line.insert(-1, "x")

    assert line.text == "ab"


def test_insert_combining_mark_merges_into_previous_cluster() -> None:
    line = Line("e")

    line.insert(1, "\u0301")

    assert line.text == DECOMPOSED_E
    assert len(line) == 1


def test_delete_removes_whole_cluster() -> None:
    line = make_line("x", FAMILY, "y")

    line.delete(1)

    assert line.text == "xy"


def test_delete_out_of_range_is_noop() -> None:
    line = Line("abc")

    line.delete(3)
    line.delete(-1)

    assert line.text == "abc"


@pytest.mark.parametrize(
    "text", ["", "plain", f"h\u00e9llo {WAVE} w{DECOMPOSED_E}rld {FAMILY}"]
)
def test_split_then_append_reconstructs(text: str) -> None:
    for at in range(len(split_graphemes(text)) + 1):
        line = Line(text)
        remainder = line.split(at)

        assert len(line) == at
        line.append(remainder)

        assert line.text == text
        assert len(line) == len(split_graphemes(text))


def test_split_past_end_yields_empty_remainder() -> None:
    line = Line("abc")

    remainder = line.split(10)

    assert line.text == "abc"
    assert remainder.text == ""


def test_append_consumes_other() -> None:
    line = Line("foo")
    other = Line("bar")

    line.append(other)

    assert line.text == "foobar"
    assert other.text == ""


def test_mutations_drop_highlighting() -> None:
    line = Line("fn main")
    line.highlight(RUST.hl_opts)
    assert line.is_highlighted

    line.insert(0, "x")

    assert not line.is_highlighted
    assert line.highlighting == []


def test_find_returns_cluster_index_not_offset() -> None:
    assert Line("a cat sat").find("cat", 0, SearchDirection.FORWARD) == 2
    assert Line(f"{FAMILY} cat").find("cat", 0, SearchDirection.FORWARD) == 2
    assert Line(f"{WAVE}{FLAG}xcat").find("cat", 1, SearchDirection.FORWARD) == 3


def test_find_skips_matches_inside_a_cluster() -> None:
    line = Line(f"{DECOMPOSED_E}e")

    assert line.find("e", 0, SearchDirection.FORWARD) == 1
    assert line.find("e", 2, SearchDirection.BACKWARD) == 1


def test_find_forward_starts_at_column() -> None:
    line = Line("cat cat")

    assert line.find("cat", 1, SearchDirection.FORWARD) == 4
    assert line.find("cat", 5, SearchDirection.FORWARD) is None


def test_find_backward_excludes_match_at_column() -> None:
    line = Line("cat cat")

    assert line.find("cat", 7, SearchDirection.BACKWARD) == 4
    assert line.find("cat", 4, SearchDirection.BACKWARD) == 0
    assert line.find("cat", 2, SearchDirection.BACKWARD) is None


def test_find_rejects_empty_query_and_out_of_range_start() -> None:
    line = Line("abc")

    assert line.find("", 0, SearchDirection.FORWARD) is None
    assert line.find("a", 4, SearchDirection.FORWARD) is None
    assert line.find("a", 4, SearchDirection.BACKWARD) is None


def test_render_clamps_and_replaces_tabs() -> None:
    line = Line("a\tb")

    assert line.render(0, 10) == "a b"
    assert line.render(1, 2) == " "
    assert line.render(5, 2) == ""


def test_render_counts_clusters() -> None:
    line = make_line(FAMILY, "x", WAVE, "y")

    assert line.render(1, 3) == f"x{WAVE}"


def test_render_emits_markers_at_tag_changes() -> None:
    line = Line("fn 1")
    line.highlight(RUST.hl_opts)

    expected = (
        foreground_marker(HighlightType.PRIMARY_KEYWORDS)
        + "fn"
        + foreground_marker(HighlightType.NONE)
        + " "
        + foreground_marker(HighlightType.NUMBER)
        + "1"
        + reset_marker()
    )
    assert line.render(0, 4) == expected


def test_render_without_highlighting_has_no_markers() -> None:
    line = Line("fn 1")

    assert "\x1b" not in line.render(0, 4)


def test_render_fragments_group_runs() -> None:
    line = Line("let x")
    line.highlight(RUST.hl_opts)

    fragments = line.render_fragments(0, 5)

    assert [(f.text, f.highlight) for f in fragments] == [
        ("let", HighlightType.PRIMARY_KEYWORDS),
        (" x", HighlightType.NONE),
    ]


def test_markers_use_truecolor_escape() -> None:
    assert foreground_marker(HighlightType.NUMBER) == "\x1b[38;2;220;163;163m"
    assert reset_marker() == "\x1b[39m"
