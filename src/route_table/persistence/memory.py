"""In-process row store used without a configured database."""

from __future__ import annotations

import dataclasses
import logging
from threading import Lock
from typing import Any, Iterable, Mapping, Sequence

from ..models.domain import DeliveryAlt, Row, RowOrderAssignment
from .base import RowNotFoundError, RowStore, split_update_fields


class InMemoryRowStore(RowStore):
    def __init__(self, rows: Iterable[Row] = ()) -> None:
        self._rows: dict[str, Row] = {row.id: row for row in rows}
        self._lock = Lock()

    def fetch_rows(self) -> list[Row]:
        with self._lock:
            return sorted(self._rows.values(), key=lambda row: row.no)

    def save_row_order(self, assignments: Sequence[RowOrderAssignment]) -> None:
        with self._lock:
            missing = [item.row_id for item in assignments if item.row_id not in self._rows]
            if missing:
                raise RowNotFoundError(missing)
            for item in assignments:
                self._rows[item.row_id] = dataclasses.replace(self._rows[item.row_id], no=item.no)
        logging.info(f"Saved order for {len(assignments)} rows in memory")

    def update_row(self, row_id: str, fields: Mapping[str, Any]) -> Row:
        known, extra = split_update_fields(fields)
        if "delivery_alt" in known:
            known["delivery_alt"] = DeliveryAlt.parse(known["delivery_alt"])
        with self._lock:
            current = self._rows.get(row_id)
            if current is None:
                raise RowNotFoundError([row_id])
            updated = dataclasses.replace(current, **known, extra={**current.extra, **extra})
            self._rows[row_id] = updated
        return updated
