"""Delivery table endpoints."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...data.rows_repository import get_row_store
from ...models.domain import ColumnSort, Row, SortDirection, ViewContext, Weekday
from ...persistence.base import RowNotFoundError, RowStoreError
from ...schemas.table import (
    Direction,
    MoveRowRequest,
    PageWindowModel,
    ReorderRequest,
    ReorderResponse,
    RowModel,
    RowOrderModel,
    RowUpdateRequest,
    RowViewModel,
    SortColumn,
    SortModel,
    SortRequest,
    TableViewResponse,
)
from ...services.scheduling.classifier import current_weekday
from ...services.table import (
    ReorderError,
    ReorderPersistence,
    aggregate_distances,
    build_table_view,
    column_sort_ids,
    move_row,
    resolve_hub,
)

router = APIRouter(prefix="/table", tags=["table"])


def _row_model(row: Row) -> RowModel:
    return RowModel(
        id=row.id,
        no=row.no,
        route=row.route,
        code=row.code,
        location=row.location,
        delivery=row.delivery,
        delivery_alt=row.delivery_alt.value,
        active=row.active,
        latitude=row.latitude,
        longitude=row.longitude,
        extra=dict(row.extra),
    )


def _load_rows():
    try:
        return get_row_store().fetch_rows()
    except RowStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


def _persist_order(ids: list[str]) -> ReorderResponse:
    persistence = ReorderPersistence(get_row_store())
    try:
        assignments = persistence.reorder(ids)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RowNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ReorderError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to save row order: {exc}") from exc
    return ReorderResponse(
        updated=len(assignments),
        order=[RowOrderModel(id=item.row_id, no=item.no) for item in assignments],
    )


@router.get("/view", response_model=TableViewResponse, status_code=status.HTTP_200_OK)
def get_table_view(
    shared: bool = Query(default=False, description="Shared view: applies schedule tiers"),
    edit_mode: bool = Query(default=False, description="Edit mode: applies schedule tiers"),
    sort: Optional[SortColumn] = Query(default=None, description="Column to sort by"),
    direction: Direction = Query(default="asc"),
    page: int = Query(default=1, description="1-based page index; out-of-range values are clamped"),
    page_size: Optional[int] = Query(default=None, ge=1, description="Rows per page"),
    disable_pagination: bool = Query(default=False),
    search: str = Query(default="", description="Case-insensitive search over every field"),
    routes: List[str] = Query(default=[], description="Only show these routes"),
    hidden_deliveries: List[str] = Query(default=[], description="Hide these delivery types"),
    weekday: Optional[int] = Query(default=None, ge=0, le=6, description="Override today (0=Sunday)"),
) -> TableViewResponse:
    if page_size is not None and page_size not in settings.page_size_options:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported page size {page_size}; expected one of {list(settings.page_size_options)}.",
        )

    today = Weekday(weekday) if weekday is not None else current_weekday(settings.timezone)
    view = ViewContext.for_view(shared=shared, edit_mode=edit_mode)
    column_sort = ColumnSort(key=sort, direction=SortDirection(direction)) if sort else None

    table = build_table_view(
        _load_rows(),
        today,
        view,
        column_sort=column_sort,
        page=page,
        page_size=page_size,
        disable_pagination=disable_pagination,
        search=search,
        routes=routes,
        hidden_deliveries=hidden_deliveries,
    )
    return TableViewResponse(
        weekday=int(today),
        tiered=view.tiered,
        rows=[
            RowViewModel(
                row=_row_model(item.row),
                tier=item.tier.value,
                kilometer=item.kilometer,
                kilometer_display=item.kilometer_display,
                display_no=item.display_no,
                is_hub=item.is_hub,
            )
            for item in table.rows
        ],
        page=table.page,
        page_size=table.page_size,
        page_count=table.page_count,
        total_rows=table.total_rows,
        filtered_rows=table.filtered_rows,
        total_distance_km=table.total_distance_km,
        return_leg_km=table.distance.return_leg_km,
        window=PageWindowModel(
            pages=table.window.pages,
            show_first=table.window.show_first,
            show_last=table.window.show_last,
        ),
        route_options=table.route_options,
        delivery_options=table.delivery_options,
        sort=SortModel(column=sort, direction=direction) if sort else None,
        totals=table.totals,
    )


@router.post("/reorder", response_model=ReorderResponse, status_code=status.HTTP_200_OK)
def reorder_rows(payload: ReorderRequest) -> ReorderResponse:
    return _persist_order(payload.ids)


@router.post("/move", response_model=ReorderResponse, status_code=status.HTTP_200_OK)
def move(payload: MoveRowRequest) -> ReorderResponse:
    ids = payload.ids if payload.ids is not None else [row.id for row in _load_rows()]
    try:
        new_order = move_row(ids, payload.source_index, payload.destination_index)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _persist_order(new_order)


@router.post("/sort", response_model=ReorderResponse, status_code=status.HTTP_200_OK)
def apply_sort(payload: SortRequest) -> ReorderResponse:
    """Store the rows in column-sorted order."""
    rows = _load_rows()
    distances = None
    if payload.column == "kilometer":
        distances = aggregate_distances(rows, resolve_hub(rows)).per_row
    column_sort = ColumnSort(key=payload.column, direction=SortDirection(payload.direction))
    return _persist_order(column_sort_ids(rows, column_sort, distances))


@router.patch("/rows/{row_id}", response_model=RowModel, status_code=status.HTTP_200_OK)
def update_row(row_id: str, payload: RowUpdateRequest) -> RowModel:
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update.")
    try:
        row = ReorderPersistence(get_row_store()).update_row(row_id, fields)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except RowNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RowStoreError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error updating row {row_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update row: {str(exc)}"
        ) from exc
    return _row_model(row)
