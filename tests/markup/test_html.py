"""Tests for marginalia.markup.html."""

from markupsafe import Markup

from marginalia.markup import parse, render_html
from marginalia.media import MediaResolver


def test_returns_markup():
    assert isinstance(render_html(parse("hi")), Markup)


def test_paragraph_alignment_class():
    html = render_html(parse("plain\n[align=right]r[/align]"))
    assert '<p class="entry-paragraph">plain</p>' in html
    assert '<p class="entry-paragraph align-right">r</p>' in html


def test_list_indent_in_16px_units():
    html = render_html(parse("1. a\n    1. b"))
    assert html.startswith('<ol class="entry-list ordered">')
    assert '<li style="margin-left:0px">a</li>' in html
    assert '<li style="margin-left:32px">b</li>' in html


def test_unordered_list_tag():
    html = render_html(parse("- a"))
    assert html == '<ul class="entry-list unordered"><li style="margin-left:0px">a</li></ul>'


def test_image_resolved_with_fallback_and_caption():
    html = render_html(parse("[image: beach.jpg | Low <tide>]"))
    assert 'src="/uploads/beach.jpg"' in html
    assert "this.onerror=null;this.src='/images/posts/fallback.svg'" in html
    assert '<div class="media-caption">Low &lt;tide&gt;</div>' in html
    assert "polaroid-card" in html


def test_youtube_embed_iframe():
    html = render_html(parse("[embed: https://www.youtube.com/watch?v=dQw4w9WgXcQ]"))
    assert "<iframe" in html
    assert "https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ?rel=0" in html
    assert "is-video" in html


def test_native_video():
    html = render_html(parse("[video: /media/clip.webm]"))
    assert "<video controls playsinline" in html
    assert 'src="/media/clip.webm"' in html


def test_custom_resolver_prefix():
    resolver = MediaResolver(upload_prefix="https://cdn.example.com/u/")
    html = render_html(parse("[image: a.png]"), resolver=resolver, alt="Title")
    assert 'src="https://cdn.example.com/u/a.png"' in html
    assert 'alt="Title"' in html


def test_src_attribute_escaped():
    html = render_html(parse('[image: /x.jpg" onload="alert(1)]'))
    assert 'onload="alert' not in html
