"""Visibility scopes: which entries a caller may read."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VisibilityScope:
    """An equality predicate over stored records.

    Build with :meth:`owner` (the signed-in owner's entries) or
    :meth:`published` (anyone's published entries).
    """

    name: str
    field: str
    value: Any

    @classmethod
    def owner(cls, owner_id: str) -> VisibilityScope:
        if not owner_id:
            raise ValueError("owner_id is required for an owner scope")
        return cls(name="owner", field="ownerId", value=owner_id)

    @classmethod
    def published(cls) -> VisibilityScope:
        return cls(name="published", field="isPublished", value=True)

    def permits(self, data: dict[str, Any]) -> bool:
        return self.field in data and data[self.field] == self.value
