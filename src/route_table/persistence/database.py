"""Supabase-backed row storage."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from supabase import Client

from ..config import settings
from ..data.records import row_from_record
from ..models.domain import DeliveryAlt, Row, RowOrderAssignment
from .base import RowNotFoundError, RowStore, RowStoreError, split_update_fields


class SupabaseRowStore(RowStore):
    """Row store over a Supabase table keyed by ``id`` with an integer ``no`` column."""

    def __init__(self, client: Client, table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.rows_table

    def fetch_rows(self) -> list[Row]:
        try:
            response = self.client.table(self.table).select("*").order("no").execute()
        except Exception as exc:
            logging.error(f"Failed to fetch rows from '{self.table}': {exc}")
            raise RowStoreError(f"Failed to fetch rows: {exc}") from exc

        rows: list[Row] = []
        for record in response.data or []:
            try:
                rows.append(row_from_record(record))
            except ValueError as e:
                logging.warning(f"Skipping invalid row record: {e}")
        return rows

    def save_row_order(self, assignments: Sequence[RowOrderAssignment]) -> None:
        if not assignments:
            return
        ids = [item.row_id for item in assignments]
        try:
            existing = self.client.table(self.table).select("id").in_("id", ids).execute()
        except Exception as exc:
            raise RowStoreError(f"Failed to verify rows before reordering: {exc}") from exc

        known_ids = {str(record["id"]) for record in (existing.data or [])}
        missing = [row_id for row_id in ids if row_id not in known_ids]
        if missing:
            raise RowNotFoundError(missing)

        for item in assignments:
            try:
                self.client.table(self.table).update({"no": item.no}).eq("id", item.row_id).execute()
            except Exception as exc:
                logging.error(f"Failed to save order for row {item.row_id}: {exc}")
                raise RowStoreError(f"Failed to save row order at row {item.row_id}: {exc}") from exc
        logging.info(f"Saved order for {len(assignments)} rows to '{self.table}'")

    def update_row(self, row_id: str, fields: Mapping[str, Any]) -> Row:
        known, extra = split_update_fields(fields)
        if "delivery_alt" in known:
            known["delivery_alt"] = DeliveryAlt.parse(known["delivery_alt"]).value
        payload = {**extra, **known}
        try:
            response = self.client.table(self.table).update(payload).eq("id", row_id).execute()
        except Exception as exc:
            logging.error(f"Failed to update row {row_id}: {exc}")
            raise RowStoreError(f"Failed to update row {row_id}: {exc}") from exc

        if not response.data:
            raise RowNotFoundError([row_id])
        return row_from_record(response.data[0])
