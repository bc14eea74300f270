"""marginalia entries: page through stored entries."""

from __future__ import annotations

import click


async def _collect(service, state, pages: int) -> None:
    while state.has_more and state.pages_loaded < pages:
        await service.load_more(state)


@click.command()
@click.option(
    "--scope",
    type=click.Choice(["published", "owner"]),
    default="published",
    show_default=True,
    help="Whose entries to list.",
)
@click.option("--owner", "owner_id", default=None, help="Owner uid (required for --scope owner).")
@click.option("--pages", default=1, show_default=True, type=click.IntRange(min=1), help="Pages to fetch.")
@click.option("--page-size", default=None, type=click.IntRange(min=1), help="Entries per page.")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="Config file (YAML or JSON).")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
def entries(scope: str, owner_id: str | None, pages: int, page_size: int | None, config_file, verbose: bool) -> None:
    """List journal entries newest first, one per line."""
    from pydantic import ValidationError

    from marginalia.core.cli.common import configure_logging, load_config
    from marginalia.core.exceptions import MarginaliaError
    from marginalia.core.utils.async_helpers import run_async_safely
    from marginalia.journal import JournalService
    from marginalia.store import create_store

    config = load_config(config_file)
    configure_logging(config, verbose)

    try:
        settings = config.validated()
        service = JournalService(
            create_store(config),
            owner_id=owner_id,
            page_size=page_size or settings.pagination.page_size,
        )
        state = service.owner_session() if scope == "owner" else service.public_session()
        run_async_safely(_collect(service, state, pages))
    except (MarginaliaError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    for entry in state.entries:
        tags = " ".join(f"#{t}" for t in entry.tags)
        click.echo(f"{entry.date:%Y-%m-%d}  {entry.id}  {entry.title}  {tags}".rstrip())

    if state.has_more:
        click.echo("... more entries available")
