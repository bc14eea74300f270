"""Marginalia CLI: entry point for the render and entries commands."""

import click

from marginalia import __version__


@click.group()
@click.version_option(version=__version__, package_name="marginalia")
def main() -> None:
    """Marginalia: render journal markup and page through entries."""


from .entries_cmd import entries
from .render_cmd import render

main.add_command(render)
main.add_command(entries)
