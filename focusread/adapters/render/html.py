"""
HTML renderer.

Produces a standalone page: one `<p>` per paragraph, every token in its own
`<span>`, highlighted words carrying an `hl-*` class. Token text is escaped,
so the output never contains markup from the input.
"""

from __future__ import annotations

import html

from focusread.core.models import Document, HighlightedToken, HighlightStyle

CSS_CLASSES: dict[HighlightStyle, str] = {
    HighlightStyle.BOLD: "hl-bold",
    HighlightStyle.ITALIC: "hl-italic",
    HighlightStyle.EMPHASIS_FONT: "hl-font",
    HighlightStyle.BACKGROUND: "hl-background",
    HighlightStyle.BOLD_EMPHASIS: "hl-font hl-bold-font",
}

_STYLESHEET = """\
body { max-width: 42rem; margin: 2rem auto; font-family: Georgia, serif; line-height: 1.7; }
.source { color: #777; font-size: 0.85rem; }
.hl-bold { font-weight: 700; color: #c2410c; }
.hl-italic { font-style: italic; color: #0f766e; }
.hl-font { font-family: "Courier New", monospace; color: #1d4ed8; }
.hl-background { background: rgba(234, 179, 8, 0.3); border-radius: 3px; padding: 0 0.125rem; }
.hl-bold-font { font-weight: 700; color: #7e22ce; }
"""


def render_token(item: HighlightedToken) -> str:
    """Return the `<span>` for one token."""
    text = html.escape(item.text, quote=False)
    if item.style is None:
        return f"<span>{text}</span>"
    return f'<span class="{CSS_CLASSES[item.style]}">{text}</span>'


class HtmlRenderer:
    """Render documents as standalone HTML pages."""

    def __init__(self, title: str = "focusread") -> None:
        self._title = title

    def render_body(self, document: Document) -> str:
        """Return only the paragraphs, without the surrounding page."""
        return "\n".join(
            "<p>" + "".join(render_token(item) for item in paragraph) + "</p>"
            for paragraph in document.paragraphs
        )

    def render(self, document: Document) -> str:
        source = ""
        if document.source:
            href = html.escape(document.source, quote=True)
            source = f'<p class="source"><a href="{href}">{href}</a></p>\n'
        return (
            "<!DOCTYPE html>\n"
            '<html>\n<head>\n<meta charset="utf-8">\n'
            f"<title>{html.escape(self._title)}</title>\n"
            f"<style>\n{_STYLESHEET}</style>\n"
            "</head>\n<body>\n"
            f"{source}{self.render_body(document)}\n"
            "</body>\n</html>\n"
        )
