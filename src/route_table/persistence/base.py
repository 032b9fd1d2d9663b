"""Contract for row storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from ..models.domain import Row, RowOrderAssignment

UPDATABLE_FIELDS = frozenset(
    {"no", "route", "code", "location", "delivery", "delivery_alt", "active", "latitude", "longitude"}
)
# Updatable fields that only coordinates may clear with None.
NON_NULLABLE_FIELDS = UPDATABLE_FIELDS - {"latitude", "longitude"}


class RowStoreError(RuntimeError):
    """Raised when the backing store rejects or fails a request."""


class RowNotFoundError(LookupError):
    def __init__(self, row_ids: Sequence[str]):
        self.row_ids = list(row_ids)
        super().__init__(f"Unknown row id(s): {', '.join(self.row_ids)}")


class RowStore(ABC):
    """Reads row snapshots and writes orderings and partial updates."""

    @abstractmethod
    def fetch_rows(self) -> list[Row]:
        raise NotImplementedError

    @abstractmethod
    def save_row_order(self, assignments: Sequence[RowOrderAssignment]) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_row(self, row_id: str, fields: Mapping[str, Any]) -> Row:
        raise NotImplementedError


def split_update_fields(fields: Mapping[str, Any]) -> tuple[dict, dict]:
    """Separate known row attributes from free-form extra columns."""
    known = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
    extra = {key: value for key, value in fields.items() if key not in UPDATABLE_FIELDS and key != "id"}
    return known, extra
