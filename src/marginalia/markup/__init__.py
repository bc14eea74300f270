"""Journal markup: inline span rendering and block parsing."""

from .blocks import (
    Alignment,
    ContentBlock,
    ListBlock,
    ListItem,
    ListKind,
    MediaBlock,
    MediaBlockKind,
    TextParagraph,
    parse,
)
from .html import render_html
from .inline import ALLOWED_FONTS, InlineRenderer, InlineToken, TokenKind, escape_html, render_inline, tokenize

__all__ = [
    "ALLOWED_FONTS",
    "Alignment",
    "ContentBlock",
    "InlineRenderer",
    "InlineToken",
    "ListBlock",
    "ListItem",
    "ListKind",
    "MediaBlock",
    "MediaBlockKind",
    "TextParagraph",
    "TokenKind",
    "escape_html",
    "parse",
    "render_html",
    "render_inline",
    "tokenize",
]
