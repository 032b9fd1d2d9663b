"""Row store resolution: database first, falling back to a seed file."""

from __future__ import annotations

import csv
import functools
import logging
from pathlib import Path
from typing import Iterator, Optional

from openpyxl import load_workbook

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Row
from ..persistence.base import RowStore
from ..persistence.database import SupabaseRowStore
from ..persistence.memory import InMemoryRowStore
from .records import row_from_record


def _iter_csv_records(path: Path) -> Iterator[dict]:
    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Rows file '{path}' is missing a header row.")
        yield from reader


def _iter_xlsx_records(path: Path) -> Iterator[dict]:
    workbook = load_workbook(path, data_only=True, read_only=True)
    try:
        sheet = workbook.active
        records = sheet.iter_rows(min_row=1, values_only=True)
        header = next(records, None)
        if header is None:
            raise ValueError(f"Rows workbook '{path}' is empty.")
        names = [str(cell).strip() if cell is not None else "" for cell in header]
        for values in records:
            if all(value is None for value in values):
                continue
            yield {name: value for name, value in zip(names, values) if name}
    finally:
        workbook.close()


@functools.lru_cache(maxsize=1)
def load_seed_rows(source: Optional[Path] = None) -> tuple[Row, ...]:
    """Load rows from the configured CSV or XLSX seed file."""

    path = source or settings.rows_file
    if not path.exists():
        raise FileNotFoundError(f"Rows file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        records = _iter_csv_records(path)
    elif suffix == ".xlsx":
        records = _iter_xlsx_records(path)
    else:
        raise ValueError(f"Unsupported rows file type '{suffix}'; expected .csv or .xlsx.")

    rows: list[Row] = []
    for index, record in enumerate(records, start=1):
        try:
            row = row_from_record(record)
        except ValueError as e:
            logging.warning(f"Skipping invalid seed row {index}: {e}")
            continue
        rows.append(row)
    logging.info(f"Loaded {len(rows)} seed rows from {path}")
    return tuple(rows)


@functools.lru_cache(maxsize=1)
def get_row_store() -> RowStore:
    """Shared row store for the running application."""
    client = get_supabase_client()
    if client is not None:
        return SupabaseRowStore(client)

    logging.info("Supabase not configured - serving rows from the seed file in memory")
    try:
        seed = load_seed_rows()
    except FileNotFoundError as e:
        logging.warning(f"{e}; starting with an empty table")
        seed = ()
    return InMemoryRowStore(seed)
