"""HTML presentation of parsed content blocks.

Block and item HTML is already sanitized by the inline renderer and is
inserted as-is; media sources and captions are escaped here.
"""

from __future__ import annotations

from collections.abc import Iterable

from markupsafe import Markup, escape

from marginalia.media.resolver import MediaKind, MediaResolver

from .blocks import ContentBlock, ListBlock, ListKind, MediaBlock, MediaBlockKind, TextParagraph

INDENT_UNIT_PX = 16

_IFRAME_ALLOW = "encrypted-media; gyroscope; picture-in-picture; web-share"


def _paragraph(block: TextParagraph) -> str:
    classes = "entry-paragraph"
    if block.alignment is not None:
        classes += f" align-{block.alignment.value}"
    return f'<p class="{classes}">{block.html}</p>'


def _list(block: ListBlock) -> str:
    tag = "ol" if block.kind is ListKind.ORDERED else "ul"
    items = "".join(
        f'<li style="margin-left:{item.indent * INDENT_UNIT_PX}px">{item.html}</li>' for item in block.items
    )
    return f'<{tag} class="entry-list {block.kind.value}">{items}</{tag}>'


def _media(block: MediaBlock, resolver: MediaResolver, alt: str) -> str:
    media = resolver.resolve(block.src)
    is_video = block.kind is not MediaBlockKind.IMAGE
    frame = "dotted-frame" if is_video else "polaroid-card"
    label = escape(block.caption or alt)

    if media.embed_src:
        inner = (
            f'<iframe src="{escape(media.embed_src)}" title="{label or "Embedded video"}" frameborder="0" '
            f'allow="{_IFRAME_ALLOW}" referrerpolicy="strict-origin-when-cross-origin" allowfullscreen></iframe>'
        )
    elif media.kind is MediaKind.VIDEO:
        src = escape(media.src)
        inner = (
            f'<video controls playsinline preload="metadata">'
            f'<source src="{src}" type="video/mp4"><source src="{src}" type="video/webm">'
            "Your browser does not support the video tag.</video>"
        )
    else:
        # onerror clears itself so the fallback is tried once.
        fallback = escape(media.fallback)
        inner = f"<img src=\"{escape(media.src)}\" alt=\"{label}\" onerror=\"this.onerror=null;this.src='{fallback}'\">"

    caption = ""
    if block.caption and not is_video:
        caption = f'<div class="media-caption">{escape(block.caption)}</div>'
    wrapper = "entry-media inline-media is-video" if is_video else "entry-media inline-media"
    return f'<div class="{wrapper}"><div class="media-card {frame}">{inner}{caption}</div></div>'


def render_html(
    blocks: Iterable[ContentBlock],
    *,
    resolver: MediaResolver | None = None,
    alt: str = "",
) -> Markup:
    """Render blocks to an HTML fragment.

    Args:
        blocks: Output of :func:`marginalia.markup.parse`.
        resolver: Media resolver for media blocks; defaults to ``/uploads/``.
        alt: Alt text for media without a caption (usually the entry title).
    """
    resolver = resolver or MediaResolver()
    parts = []
    for block in blocks:
        if isinstance(block, TextParagraph):
            parts.append(_paragraph(block))
        elif isinstance(block, ListBlock):
            parts.append(_list(block))
        elif isinstance(block, MediaBlock):
            parts.append(_media(block, resolver, alt))
    return Markup("\n".join(parts))
