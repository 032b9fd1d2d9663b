"""Search and filter helpers applied before sorting."""

from __future__ import annotations

from dataclasses import fields
from typing import Iterable, Iterator, Sequence

from ...models.domain import Row


def _searchable_values(row: Row) -> Iterator[str]:
    for row_field in fields(row):
        value = getattr(row, row_field.name)
        if row_field.name == "extra":
            for extra_value in value.values():
                yield str(extra_value)
        elif hasattr(value, "value"):
            yield str(value.value)
        else:
            yield str(value)


def matches_search(row: Row, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(needle in value.lower() for value in _searchable_values(row))


def filter_rows(
    rows: Sequence[Row],
    search: str = "",
    routes: Iterable[str] = (),
    hidden_deliveries: Iterable[str] = (),
) -> list[Row]:
    """Keep rows matching the search term, inside the selected routes and not in a hidden delivery type."""
    route_set = {route for route in routes if route}
    hidden_set = {delivery for delivery in hidden_deliveries if delivery}
    search = (search or "").strip()
    return [
        row
        for row in rows
        if matches_search(row, search)
        and (not route_set or row.route in route_set)
        and row.delivery not in hidden_set
    ]


def _unique(values: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


def route_options(rows: Sequence[Row]) -> list[str]:
    return _unique(row.route for row in rows)


def delivery_options(rows: Sequence[Row]) -> list[str]:
    return _unique(row.delivery for row in rows)
