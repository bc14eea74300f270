"""Block parsing for entry bodies.

One left-to-right pass over the lines of an entry. Lines end at LF, CRLF
or CR only; other Unicode separators stay inside the line.

- blank lines close any open list and produce nothing;
- list lines (``-``, ``*``, ``•`` or ``N.`` followed by a space) collect
  into one list block per run of the same kind;
- ``[image: src | caption]``, ``[video: url]``, ``[embed: url]`` and
  ``[align=left|center|right]...[/align]`` lines become their own blocks;
- everything else is a paragraph.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .inline import InlineRenderer, _default_renderer


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ListKind(Enum):
    ORDERED = "ordered"
    UNORDERED = "unordered"


class MediaBlockKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    EMBED = "embed"


@dataclass(frozen=True)
class TextParagraph:
    html: str
    alignment: Alignment | None = None


@dataclass(frozen=True)
class ListItem:
    html: str
    indent: int = 0


@dataclass
class ListBlock:
    kind: ListKind
    items: list[ListItem] = field(default_factory=list)


@dataclass(frozen=True)
class MediaBlock:
    kind: MediaBlockKind
    src: str
    caption: str | None = None


ContentBlock = Union[TextParagraph, ListBlock, MediaBlock]

_LIST_RE = re.compile(r"^(\s*)([-*•]|\d+\.)\s+(.+)$")
_IMAGE_RE = re.compile(r"^\[image:\s*(.+?)\s*\]$", re.IGNORECASE)
_VIDEO_RE = re.compile(r"^\[video:\s*(.+?)\s*\]$", re.IGNORECASE)
_EMBED_RE = re.compile(r"^\[embed:\s*(.+?)\s*\]$", re.IGNORECASE)
_ALIGN_RE = re.compile(r"^\[align=(left|center|right)\](.*)\[/align\]$", re.IGNORECASE)
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def _directive_block(line: str, renderer: InlineRenderer) -> ContentBlock:
    trimmed = line.strip()

    match = _IMAGE_RE.match(trimmed)
    if match:
        src, _, caption = match.group(1).partition("|")
        return MediaBlock(MediaBlockKind.IMAGE, src=src.strip(), caption=caption.strip() or None)

    match = _VIDEO_RE.match(trimmed)
    if match:
        return MediaBlock(MediaBlockKind.VIDEO, src=match.group(1))

    match = _EMBED_RE.match(trimmed)
    if match:
        return MediaBlock(MediaBlockKind.EMBED, src=match.group(1))

    match = _ALIGN_RE.match(trimmed)
    if match:
        return TextParagraph(html=renderer.render(match.group(2)), alignment=Alignment(match.group(1).lower()))

    return TextParagraph(html=renderer.render(line))


def parse(raw_content: str | None, renderer: InlineRenderer | None = None) -> list[ContentBlock]:
    """Parse an entry body into content blocks. Never raises on bad markup."""
    renderer = renderer or _default_renderer
    blocks: list[ContentBlock] = []
    open_list: ListBlock | None = None

    for line in _NEWLINE_RE.split(raw_content or ""):
        if not line.strip():
            if open_list is not None:
                blocks.append(open_list)
                open_list = None
            continue

        match = _LIST_RE.match(line)
        if match:
            kind = ListKind.ORDERED if match.group(2)[0].isdigit() else ListKind.UNORDERED
            if open_list is not None and open_list.kind is not kind:
                blocks.append(open_list)
                open_list = None
            if open_list is None:
                open_list = ListBlock(kind=kind)
            open_list.items.append(ListItem(html=renderer.render(match.group(3)), indent=len(match.group(1)) // 2))
            continue

        if open_list is not None:
            blocks.append(open_list)
            open_list = None
        blocks.append(_directive_block(line, renderer))

    if open_list is not None:
        blocks.append(open_list)
    return blocks
