"""Display ordering for table rows.

Rows are grouped into buckets (schedule tiers in tiered views, active versus
inactive otherwise), ordered inside each bucket by the selected column, and
the active hub row is finally pinned to the top. Every step relies on
Python's stable sort, so rows that compare equal keep their input order.
"""

from __future__ import annotations

import functools
import logging
import math
import re
from typing import Callable, Mapping, Optional, Sequence

from ...config import settings
from ...models.domain import ColumnSort, Row, SortDirection, ViewContext, Weekday
from ..scheduling.classifier import TIER_PRIORITY, classify

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

NUMERIC_COLUMNS = ("code", "kilometer", "order")
TEXT_COLUMNS = ("route", "location", "delivery")
SORTABLE_COLUMNS = NUMERIC_COLUMNS + TEXT_COLUMNS


def parse_int_prefix(value: object) -> int:
    """Leading integer of ``value``; anything unparseable is 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else 0


def parse_float_prefix(value: object) -> float:
    """Leading decimal number of ``value``; anything unparseable is 0.0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    match = _FLOAT_PREFIX.match(str(value))
    return float(match.group(1)) if match else 0.0


def _text_compare(left: str, right: str) -> int:
    left_key, right_key = left.casefold(), right.casefold()
    if left_key != right_key:
        return -1 if left_key < right_key else 1
    if left != right:
        # Lowercase first on case-only differences.
        return -1 if left.swapcase() < right.swapcase() else 1
    return 0


def _number_compare(left: float, right: float) -> int:
    return (left > right) - (left < right)


RowComparator = Callable[[Row, Row], int]


def column_comparator(
    column_sort: ColumnSort,
    distances: Optional[Mapping[str, Optional[float]]] = None,
) -> RowComparator:
    """Comparator for one column, with the direction applied as a sign."""

    sign = SortDirection(column_sort.direction).sign
    key = column_sort.key
    distances = distances or {}

    if key == "code":
        def compare(a: Row, b: Row) -> int:
            return _number_compare(parse_int_prefix(a.code), parse_int_prefix(b.code)) * sign
    elif key == "kilometer":
        def compare(a: Row, b: Row) -> int:
            return _number_compare(
                parse_float_prefix(distances.get(a.id)), parse_float_prefix(distances.get(b.id))
            ) * sign
    elif key == "order":
        def compare(a: Row, b: Row) -> int:
            return _number_compare(parse_int_prefix(a.no), parse_int_prefix(b.no)) * sign
    elif key in TEXT_COLUMNS:
        def compare(a: Row, b: Row) -> int:
            return _text_compare(getattr(a, key) or "", getattr(b, key) or "") * sign
    else:
        logger.debug("Column '%s' is not sortable; keeping input order", key)

        def compare(a: Row, b: Row) -> int:
            return 0

    return compare


def pin_hub(rows: list[Row], hub_location: str) -> list[Row]:
    """Move the first active hub row to index 0."""
    for index, row in enumerate(rows):
        if row.active and row.is_hub(hub_location):
            if index > 0:
                rows.insert(0, rows.pop(index))
            break
    return rows


def sort_rows(
    rows: Sequence[Row],
    today: Weekday,
    view: ViewContext,
    column_sort: Optional[ColumnSort] = None,
    *,
    distances: Optional[Mapping[str, Optional[float]]] = None,
    hub_location: Optional[str] = None,
) -> list[Row]:
    """Return rows in display order without touching their persisted ``no``."""

    if view.tiered:
        def bucket(row: Row) -> int:
            return TIER_PRIORITY[classify(row, today, view)]
    else:
        def bucket(row: Row) -> int:
            return 0 if row.active is not False else 1

    ordered = list(rows)
    if column_sort is not None:
        ordered.sort(key=functools.cmp_to_key(column_comparator(column_sort, distances)))
    ordered.sort(key=bucket)

    return pin_hub(ordered, settings.hub_location if hub_location is None else hub_location)


def column_sort_ids(
    rows: Sequence[Row],
    column_sort: ColumnSort,
    distances: Optional[Mapping[str, Optional[float]]] = None,
) -> list[str]:
    """Plain column sort, without tiers or hub pinning, as an id sequence to persist."""
    ordered = sorted(rows, key=functools.cmp_to_key(column_comparator(column_sort, distances)))
    return [row.id for row in ordered]


def toggle_sort(current: Optional[ColumnSort], column: str) -> Optional[ColumnSort]:
    """Header click cycle: none, ascending, descending, then none again."""
    if current is None or current.key != column:
        return ColumnSort(key=column, direction=SortDirection.ASC)
    if SortDirection(current.direction) is SortDirection.ASC:
        return ColumnSort(key=column, direction=SortDirection.DESC)
    return None
