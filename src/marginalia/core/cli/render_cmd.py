"""marginalia render: parse an entry body and print its blocks."""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum

import click


def _jsonable(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def block_to_dict(block) -> dict:
    return {"type": type(block).__name__, **_jsonable(asdict(block))}


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--html", "as_html", is_flag=True, help="Print rendered HTML instead of JSON blocks.")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="Config file (YAML or JSON).")
def render(source, as_html: bool, config_file: str | None) -> None:
    """Render an entry body from SOURCE ('-' for stdin)."""
    from marginalia.core.cli.common import load_config
    from marginalia.markup import InlineRenderer, parse, render_html
    from marginalia.media import MediaResolver

    config = load_config(config_file)
    blocks = parse(source.read(), renderer=InlineRenderer.from_config(config))

    if as_html:
        click.echo(render_html(blocks, resolver=MediaResolver.from_config(config)))
    else:
        click.echo(json.dumps([block_to_dict(b) for b in blocks], indent=2, ensure_ascii=False))
