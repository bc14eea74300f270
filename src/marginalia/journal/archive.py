"""Year/month grouping of loaded entries for archive navigation."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Entry


def group_by_month(entries: Iterable[Entry]) -> dict[int, dict[str, list[Entry]]]:
    """Group entries by display year, then English month name.

    Years come out newest first; months keep the order they were first
    seen in, and entries keep their input order.
    """
    groups: dict[int, dict[str, list[Entry]]] = {}
    for entry in entries:
        month = entry.date.strftime("%B")
        groups.setdefault(entry.date.year, {}).setdefault(month, []).append(entry)
    return {year: groups[year] for year in sorted(groups, reverse=True)}
