"""Read-only tabular data source interface."""

from __future__ import annotations

from typing import Any, Protocol

Rows = list[list[Any]]


class TabularSource(Protocol):
    """Returns the raw cell rows of a named range (header row first)."""

    def get_range(self, range_name: str) -> Rows:
        ...
