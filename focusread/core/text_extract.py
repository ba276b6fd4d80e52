"""Utilities for extracting readable text from HTML.

This module provides lightweight, dependency-free helpers used by the fetcher.
`html_to_text` reduces a page to paragraph-separated plain text;
`neutralize_html` keeps the markup but removes the parts that execute code.
Neither is a full HTML parser: both work on regular expressions and degrade
to plain text on malformed input instead of raising.
"""

from __future__ import annotations

import html
import re

# A block cut off before its closing tag (e.g. by a body size limit) runs to
# the end of the input.
_SCRIPT_RE = re.compile(r"<script\b[^>]*(?:>[\s\S]*?(?:</script\s*>|\Z)|\Z)", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style\b[^>]*(?:>[\s\S]*?(?:</style\s*>|\Z)|\Z)", re.IGNORECASE)
_COMMENT_RE = re.compile(r"<!--[\s\S]*?(?:-->|\Z)")
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_CLOSE_RE = re.compile(r"</(?:p|div|h[1-6]|li|blockquote|tr|dt|dd)\s*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^<>]+>")
_ENTITY_RE = re.compile(r"&(?:[a-zA-Z]+|#39);")
_SPACES_RE = re.compile(r"[ \t]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

# A quoted attribute value may contain ">" without ending the tag.
_OPEN_TAG_RE = re.compile(
    r"""<(?P<name>[a-zA-Z][^\s/>]*)(?P<attrs>(?:"[^"]*"|'[^']*'|[^'">])*)>"""
)
_ATTR_RE = re.compile(
    r"""(?P<sep>[\s/]+)(?P<name>[^\s/>="']+)"""
    r"""(?:\s*=\s*(?P<value>"[^"]*"|'[^']*'|[^\s>]*))?"""
)
_HEAD_OPEN_RE = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_BASE_RE = re.compile(r"<base\b", re.IGNORECASE)

# Named entities decoded by decode_entities(); everything else is left as-is.
ENTITIES: dict[str, str] = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&apos;": "'",
    "&#39;": "'",
    "&nbsp;": " ",
}

JS_HREF_PLACEHOLDER = "#"


def decode_entities(text: str) -> str:
    """Replace the supported named entities with their literal characters.

    Args:
        text: Text that may contain HTML character entities.

    Returns:
        Text with `&amp;`, `&lt;`, `&gt;`, `&quot;`, `&apos;`/`&#39;` and
        `&nbsp;` decoded. Unknown entities pass through unchanged.
    """
    return _ENTITY_RE.sub(lambda m: ENTITIES.get(m.group(0), m.group(0)), text)


def normalize_whitespace(text: str) -> str:
    """Collapse spacing while keeping paragraph breaks.

    Runs of spaces and tabs become one space, every line is trimmed, and
    three or more consecutive newlines collapse to exactly two.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _SPACES_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def html_to_text(html_body: str) -> str:
    """Strip HTML to plain text, keeping block structure as line breaks.

    Args:
        html_body: HTML document or fragment.

    Returns:
        Plain-text extraction with script/style/comment content removed,
        block-level closing tags and `<br>` turned into newlines, and all
        other tags replaced by a single space.
    """
    text = _SCRIPT_RE.sub("", html_body)
    text = _STYLE_RE.sub("", text)
    text = _COMMENT_RE.sub("", text)

    text = _BR_RE.sub("\n", text)
    text = _BLOCK_CLOSE_RE.sub("\n", text)
    # a space keeps words from different elements apart
    text = _TAG_RE.sub(" ", text)

    return normalize_whitespace(decode_entities(text))


def neutralize_html(html_body: str, base_url: str | None = None) -> str:
    """Keep the markup of a page but drop what would run code when displayed.

    Script blocks and `on*` event-handler attributes are removed and
    `javascript:` links are replaced by a placeholder. When *base_url* is
    given and the document has a `<head>` without a `<base>`, a
    `<base target="_blank">` pointing at *base_url* is injected so relative
    links and images resolve against the page they came from.

    Args:
        html_body: HTML document or fragment.
        base_url: Final URL the document was served from (after redirects).

    Returns:
        The reduced-risk HTML string.
    """
    text = _SCRIPT_RE.sub("", html_body)
    text = _OPEN_TAG_RE.sub(_neutralize_tag, text)

    if base_url:
        head = _HEAD_OPEN_RE.search(text)
        if head is not None and not _head_has_base(text, head.end()):
            base_tag = f'<base href="{html.escape(base_url, quote=True)}" target="_blank">'
            text = text[: head.end()] + base_tag + text[head.end() :]
    return text


def _head_has_base(text: str, head_start: int) -> bool:
    """Whether the head section starting at *head_start* has a real `<base>` tag."""
    head_close = _HEAD_CLOSE_RE.search(text, head_start)
    head_end = head_close.start() if head_close is not None else len(text)
    return _BASE_RE.search(_COMMENT_RE.sub("", text[head_start:head_end])) is not None


def _neutralize_tag(match: re.Match[str]) -> str:
    attrs = _ATTR_RE.sub(_neutralize_attr, match.group("attrs"))
    return f"<{match.group('name')}{attrs}>"


def _neutralize_attr(match: re.Match[str]) -> str:
    name = match.group("name").lower()
    if name.startswith("on"):
        return ""
    value = match.group("value")
    if name == "href" and value is not None:
        target = value.strip("\"'").strip().lower()
        if target.startswith("javascript:"):
            return f'{match.group("sep")}{match.group("name")}="{JS_HREF_PLACEHOLDER}"'
    return match.group(0)
