"""Inline span rendering.

Text is HTML-escaped first, then a single-pass tokenizer picks out the
inline tags (``[u]``, ``[mark=..]``, ``[color=..]``, ``[size=..]``,
``[font=..]`` and their closers) from the escaped text. Each tag becomes
its HTML open or close element on its own; nesting and balance are not
checked, so stray or unmatched tags just produce stray output.

Because escaping happens before tokenizing, tag values only ever contain
escaped text and can't open new elements.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from html import escape

ALLOWED_FONTS = frozenset({"EB Garamond", "Newsreader", "Inter"})

INLINE_TAGS = ("u", "mark", "color", "size", "font")

_TAG_RE = re.compile(
    r"\[(?P<bare>u)\]"
    r"|\[/(?P<close>u|mark|color|size|font)\]"
    r"|\[(?P<open>mark|color|size|font)=(?P<value>[^\]]+)\]",
    re.IGNORECASE,
)

_HEX_COLOR = r"#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})"
_NAMED_COLOR = r"[a-z]+"
_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:%|deg|rad|turn)?"
_COLOR_FUNCTION = rf"(?:rgba?|hsla?)\(\s*{_NUMBER}(?:\s*[,\s/]\s*{_NUMBER}){{2,3}}\s*\)"
_CSS_COLOR_RE = re.compile(rf"^(?:{_HEX_COLOR}|{_NAMED_COLOR}|{_COLOR_FUNCTION})$", re.IGNORECASE)


class TokenKind(Enum):
    TEXT = "text"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class InlineToken:
    kind: TokenKind
    text: str = ""
    tag: str = ""
    value: str = ""


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` (single quote as ``&#39;``)."""
    return escape(text, quote=True).replace("&#x27;", "&#39;")


def tokenize(escaped: str) -> list[InlineToken]:
    """Split already-escaped text into text runs and inline tag tokens."""
    tokens: list[InlineToken] = []
    pos = 0
    for match in _TAG_RE.finditer(escaped):
        if match.start() > pos:
            tokens.append(InlineToken(TokenKind.TEXT, text=escaped[pos : match.start()]))
        if match.group("bare"):
            tokens.append(InlineToken(TokenKind.OPEN, tag="u"))
        elif match.group("close"):
            tokens.append(InlineToken(TokenKind.CLOSE, tag=match.group("close").lower()))
        else:
            tokens.append(InlineToken(TokenKind.OPEN, tag=match.group("open").lower(), value=match.group("value")))
        pos = match.end()
    if pos < len(escaped):
        tokens.append(InlineToken(TokenKind.TEXT, text=escaped[pos:]))
    return tokens


def is_css_color(value: str) -> bool:
    """Loose CSS colour check: hex, a bare keyword, or an rgb()/hsl() call."""
    return bool(_CSS_COLOR_RE.match(value))


def resolve_size(value: str) -> str:
    """Keep digits and dots; ``14.5em`` -> ``14.5px``, ``abc`` -> ``inherit``."""
    numeric = re.sub(r"[^\d.]", "", value.strip())
    return f"{numeric}px" if numeric else "inherit"


class InlineRenderer:
    """Renders inline markup into a sanitized HTML fragment.

    Args:
        allowed_fonts: Font families ``[font=..]`` may select. Anything else
            yields a bare ``<span>``.
        strict_colors: Require ``[mark=..]``/``[color=..]`` values to look like
            a CSS colour; rejected values yield a bare ``<span>``. With
            ``False`` the trimmed value is used as-is.
    """

    def __init__(self, allowed_fonts: Iterable[str] = ALLOWED_FONTS, strict_colors: bool = True):
        self.allowed_fonts = frozenset(allowed_fonts)
        self.strict_colors = strict_colors

    @classmethod
    def from_config(cls, config) -> InlineRenderer:
        strict = config.get("markup.strict_colors", True)
        if isinstance(strict, str):
            strict = strict.strip().lower() not in ("0", "false", "no", "off")
        fonts = config.get("markup.allowed_fonts", ALLOWED_FONTS)
        if isinstance(fonts, str):
            # env vars arrive as "EB Garamond,Inter"
            fonts = [name.strip() for name in fonts.split(",") if name.strip()]
        return cls(
            allowed_fonts=fonts,
            strict_colors=bool(strict),
        )

    def _color(self, value: str) -> str | None:
        value = value.strip()
        if self.strict_colors and not is_css_color(value):
            return None
        return value

    def _open(self, token: InlineToken) -> str:
        if token.tag == "u":
            return "<u>"
        if token.tag == "mark":
            color = self._color(token.value)
            if color is None:
                return "<span>"
            return f'<span style="background:{color};padding:0 2px;border-radius:2px">'
        if token.tag == "color":
            color = self._color(token.value)
            if color is None:
                return "<span>"
            return f'<span style="color:{color}">'
        if token.tag == "size":
            return f'<span style="font-size:{resolve_size(token.value)}">'
        font = token.value.strip()
        if font not in self.allowed_fonts:
            return "<span>"
        return f'<span style="font-family:{font}">'

    def render_tokens(self, tokens: Iterable[InlineToken]) -> str:
        parts = []
        for token in tokens:
            if token.kind is TokenKind.TEXT:
                parts.append(token.text)
            elif token.kind is TokenKind.OPEN:
                parts.append(self._open(token))
            else:
                parts.append("</u>" if token.tag == "u" else "</span>")
        return "".join(parts)

    def render(self, text: str) -> str:
        if not text:
            return ""
        return self.render_tokens(tokenize(escape_html(text)))


_default_renderer = InlineRenderer()


def render_inline(text: str) -> str:
    """Render inline markup with the default font whitelist and colour check."""
    return _default_renderer.render(text)
