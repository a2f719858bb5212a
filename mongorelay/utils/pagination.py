from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ConnectionArgs:
    """Relay pagination arguments.

    ``None`` means the argument was not supplied. Any other value, including
    ``0``, counts as supplied.
    """

    after: str | None = None
    before: str | None = None
    first: int | None = None
    last: int | None = None

    @classmethod
    def coerce(cls, value: ConnectionArgs | Mapping[str, Any] | None) -> ConnectionArgs:
        """Build ConnectionArgs from an instance, a mapping, or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            allowed = {f.name for f in fields(cls)}
            unknown = set(value) - allowed
            if unknown:
                raise TypeError(
                    f"Unknown connection arguments: {', '.join(sorted(unknown))}"
                )
            return cls(**value)
        raise TypeError(
            f"Cannot build ConnectionArgs from {type(value).__name__}"
        )


@dataclass(frozen=True)
class Edge(Generic[T]):
    """A node together with the cursor of its absolute offset."""

    cursor: str
    node: T


@dataclass(frozen=True)
class PageInfo:
    start_cursor: str | None
    end_cursor: str | None
    has_previous_page: bool
    has_next_page: bool


@dataclass(frozen=True)
class Connection(Generic[T]):
    """Cursor-paginated result: edges plus page metadata."""

    edges: tuple[Edge[T], ...]
    page_info: PageInfo

    @property
    def nodes(self) -> list[T]:
        return [edge.node for edge in self.edges]
