"""Turn highlighted lines into Rich text for a Textual host."""

from __future__ import annotations

from typing import Iterable, Optional

from rich.style import Style
from rich.text import Text
from textual import events
from textual.widgets import Static

from line_engine.buffer import Document, Fragment, Line
from line_engine.highlighting import HighlightType

EMPTY_ROW_MARKER = "~"


def style_for(highlight: Optional[HighlightType]) -> Style:
    if highlight is None:
        return Style.null()
    return Style(color=highlight.to_color())


def fragments_to_text(fragments: Iterable[Fragment]) -> Text:
    text = Text(no_wrap=True, end="")
    for fragment in fragments:
        text.append(fragment.text, style=style_for(fragment.highlight))
    return text


def line_to_text(line: Line, start: int, end: int) -> Text:
    return fragments_to_text(line.render_fragments(start, end))


def document_to_text(
    document: Document,
    *,
    top: int,
    height: int,
    left: int = 0,
    width: int = 80,
    word: Optional[str] = None,
) -> Text:
    """Highlight through the last visible row and stack the visible slice.

    Rows past the end of the document are drawn as ``~``.
    """

    document.highlight(word, top + height)
    rows = []
    for y in range(top, top + height):
        line = document.get_line(y)
        if line is None:
            rows.append(Text(EMPTY_ROW_MARKER, no_wrap=True, end=""))
        else:
            rows.append(line_to_text(line, left, left + width))
    return Text("\n", no_wrap=True, end="").join(rows)


class DocumentView(Static):
    """Static widget showing the visible window of a ``Document``."""

    DEFAULT_CSS = """
    DocumentView {
        height: 1fr;
    }
    """

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__("", name=name, id=id, classes=classes)
        self.document = document or Document()
        self.top = 0
        self.left = 0
        self.search_word: Optional[str] = None

    def show(
        self,
        *,
        top: Optional[int] = None,
        left: Optional[int] = None,
        word: Optional[str] = None,
    ) -> None:
        if top is not None:
            self.top = max(top, 0)
        if left is not None:
            self.left = max(left, 0)
        self.search_word = word
        self.redraw()

    def redraw(self) -> None:
        height = self.size.height or 1
        width = self.size.width or 80
        self.update(
            document_to_text(
                self.document,
                top=self.top,
                height=height,
                left=self.left,
                width=width,
                word=self.search_word,
            )
        )

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.redraw()


__all__ = [
    "DocumentView",
    "document_to_text",
    "fragments_to_text",
    "line_to_text",
    "style_for",
]
