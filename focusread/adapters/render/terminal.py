"""
Terminal renderer.

Draws a highlighted document with Rich styles. Terminals have no font
families, so the emphasis-font styles fall back to underlining.
"""

from __future__ import annotations

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from focusread.core.models import Document, HighlightedToken, HighlightStyle

RICH_STYLES: dict[HighlightStyle, str] = {
    HighlightStyle.BOLD: "bold cyan",
    HighlightStyle.ITALIC: "italic magenta",
    HighlightStyle.EMPHASIS_FONT: "underline green",
    HighlightStyle.BACKGROUND: "on grey30",
    HighlightStyle.BOLD_EMPHASIS: "bold underline yellow",
}


def paragraph_text(paragraph: list[HighlightedToken]) -> Text:
    """Build a Rich Text for one paragraph of highlighted tokens."""
    text = Text()
    for item in paragraph:
        if item.style is None:
            text.append(item.text)
        else:
            text.append(item.text, style=RICH_STYLES[item.style])
    return text


class TerminalRenderer:
    """Render documents for a terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, document: Document) -> str:
        """Return the document as a string, with ANSI styling when the console supports it."""
        with self._console.capture() as capture:
            self.print(document)
        return capture.get()

    def print(self, document: Document) -> None:
        """Print the document straight to the console."""
        console = self._console
        if document.source:
            console.print(Text(document.source, style="dim"))
            console.print(Rule(style="dim"))
        for index, paragraph in enumerate(document.paragraphs):
            if index:
                console.print()
            console.print(paragraph_text(paragraph), highlight=False)
