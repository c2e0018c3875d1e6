"""Markdown rendering for chat bubbles.

Assistant replies are converted with Python-Markdown. Fenced code blocks
tagged with a language are then re-rendered through Pygments with inline
styles, and headings get fixed size overrides so they stand out inside
a bubble. Raw HTML in replies is shown as text, never injected.
"""

import html
import re

import markdown
from markdown.extensions import Extension
from pydantic import BaseModel, ConfigDict
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from gemini_chat.agent.config import DisplayConfig
from gemini_chat.models.schemas import Message, Sender

CODE_STYLE = "monokai"

HEADING_STYLES = {
    "h1": "font-size: 2em; font-weight: bold",
    "h2": "font-size: 1.5em; font-weight: bold",
    "h3": "font-size: 1.17em; font-weight: bold",
}

_CODE_BLOCK_RE = re.compile(r'<pre><code class="([^"]*)">(.*?)</code></pre>', re.DOTALL)
_LANGUAGE_RE = re.compile(r"language-(\w+)")
_HEADING_RE = re.compile(r"<(h[123])>")


class _EscapeHtml(Extension):
    """Treat raw HTML in the source as literal text."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")


class RenderedMessage(BaseModel):
    """Display-ready form of one transcript message.

    Attributes:
        sender: Who wrote the message.
        html: Bubble content as HTML.
        is_generating: Whether to show the streaming animation.
    """

    model_config = ConfigDict(frozen=True)

    sender: Sender
    html: str
    is_generating: bool


def _highlight_block(match: re.Match[str]) -> str:
    language = _LANGUAGE_RE.search(match.group(1))
    if not language:
        return match.group(0)
    try:
        lexer = get_lexer_by_name(language.group(1))
    except ClassNotFound:
        return match.group(0)

    code = html.unescape(match.group(2)).rstrip("\n")
    return highlight(code, lexer, HtmlFormatter(style=CODE_STYLE, noclasses=True))


def _style_heading(match: re.Match[str]) -> str:
    tag = match.group(1)
    return f'<{tag} style="{HEADING_STYLES[tag]}">'


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports everything Python-Markdown does plus fenced code and tables.
    Unterminated fences (common mid-stream) render as plain paragraphs
    until the closing fence arrives.
    """
    md = markdown.Markdown(extensions=["fenced_code", "tables", _EscapeHtml()])
    rendered = md.convert(text)
    rendered = _CODE_BLOCK_RE.sub(_highlight_block, rendered)
    return _HEADING_RE.sub(_style_heading, rendered)


def plain_to_html(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def render_message(message: Message, display: DisplayConfig) -> RenderedMessage:
    """Render a single message.

    User text is shown verbatim. Assistant text is rendered as markdown,
    with the placeholder standing in for a reply that has no text yet.
    """
    if message.sender == Sender.USER:
        content = plain_to_html(message.text)
    else:
        content = markdown_to_html(message.text or display.placeholder_text)
    return RenderedMessage(
        sender=message.sender,
        html=content,
        is_generating=message.is_generating,
    )


def render_transcript(
    messages: tuple[Message, ...], display: DisplayConfig
) -> list[RenderedMessage]:
    """Render a store snapshot. Reads only, so repeated calls agree."""
    return [render_message(message, display) for message in messages]
