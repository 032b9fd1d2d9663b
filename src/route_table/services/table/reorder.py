"""Persisting explicit row orderings.

Drag-and-drop and persisted column sorts both end here as a complete id
sequence. The sequence is numbered 1..N and handed to the row store in one
call. Nothing in memory is updated ahead of the store: callers re-read the
rows once the call returns. Overlapping reorders are not sequenced, so the
last one to reach the store wins.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Mapping, Sequence

from ...models.domain import Row, RowOrderAssignment
from ...persistence.base import NON_NULLABLE_FIELDS, RowNotFoundError, RowStore, RowStoreError
from ..scheduling.classifier import delivery_alt_update

logger = logging.getLogger(__name__)


class ReorderError(RuntimeError):
    """Raised when a new ordering could not be stored."""


def assign_order(ids_in_new_order: Sequence[str]) -> list[RowOrderAssignment]:
    duplicates = [row_id for row_id, count in Counter(ids_in_new_order).items() if count > 1]
    if duplicates:
        raise ValueError(f"Duplicate row id(s) in ordering: {', '.join(duplicates)}")
    if any(not row_id for row_id in ids_in_new_order):
        raise ValueError("Row ids in an ordering must be non-empty.")
    return [RowOrderAssignment(row_id=row_id, no=index) for index, row_id in enumerate(ids_in_new_order, start=1)]


def move_row(ids: Sequence[str], source_index: int, destination_index: int) -> list[str]:
    """Apply a drag result: take the id at ``source_index`` and insert it at ``destination_index``."""
    if not 0 <= source_index < len(ids):
        raise ValueError(f"Source index {source_index} is outside 0..{len(ids) - 1}.")
    if not 0 <= destination_index < len(ids):
        raise ValueError(f"Destination index {destination_index} is outside 0..{len(ids) - 1}.")
    reordered = list(ids)
    moved = reordered.pop(source_index)
    reordered.insert(destination_index, moved)
    return reordered


class ReorderPersistence:
    """Boundary between the table engine and the row store."""

    def __init__(self, store: RowStore) -> None:
        self.store = store

    def reorder(self, ids_in_new_order: Sequence[str]) -> list[RowOrderAssignment]:
        assignments = assign_order(ids_in_new_order)
        try:
            self.store.save_row_order(assignments)
        except RowNotFoundError:
            raise
        except RowStoreError as exc:
            logger.error("Reorder of %d rows failed: %s", len(assignments), exc)
            raise ReorderError(str(exc)) from exc
        logger.info("Reordered %d rows", len(assignments))
        return assignments

    def update_row(self, row_id: str, fields: Mapping[str, Any]) -> Row:
        nulled = sorted(name for name, value in fields.items() if name in NON_NULLABLE_FIELDS and value is None)
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        updates = dict(fields)
        if "delivery_alt" in updates:
            updates.update(delivery_alt_update(updates["delivery_alt"]))
        return self.store.update_row(row_id, updates)
