"""Table view assembly: filter, classify, sort, measure and paginate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ...config import settings
from ...models.domain import Column, ColumnSort, Row, Tier, ViewContext, Weekday
from ..scheduling.classifier import classify
from .distance import DistanceSummary, aggregate_distances, format_distance, resolve_hub
from .filters import delivery_options, filter_rows, route_options
from .paginator import PageWindow, page_window, paginate
from .sorter import parse_float_prefix, sort_rows

HUB_DISPLAY_NUMBER = "∞"
CURRENCY_COLUMNS = ("tngRoute", "destination", "tollPrice")
TOTALLED_TYPES = ("number", "currency")

DEFAULT_COLUMNS = (
    Column(id="no", data_key="no", label="No", type="number", sort_order=0),
    Column(id="route", data_key="route", label="Route", sort_order=1),
    Column(id="code", data_key="code", label="Code", sort_order=2),
    Column(id="location", data_key="location", label="Location", sort_order=3),
    Column(id="delivery", data_key="delivery", label="Delivery", type="select", sort_order=4),
    Column(id="kilometer", data_key="kilometer", label="Kilometer", type="number", sort_order=5),
    Column(id="tollPrice", data_key="tollPrice", label="Toll Price", type="currency", sort_order=6),
)


@dataclass(slots=True)
class RowView:
    row: Row
    tier: Tier
    kilometer: Optional[float]
    kilometer_display: str
    display_no: str
    is_hub: bool


@dataclass(slots=True)
class TableView:
    rows: list[RowView]
    page: int
    page_size: int
    page_count: int
    total_rows: int
    filtered_rows: int
    distance: DistanceSummary
    window: PageWindow
    route_options: list[str] = field(default_factory=list)
    delivery_options: list[str] = field(default_factory=list)
    sort: Optional[ColumnSort] = None
    totals: dict[str, float] = field(default_factory=dict)

    @property
    def total_distance_km(self) -> float:
        return self.distance.total


def display_number(position: int, row: Row, hub_on_top: bool, hub_location: str) -> str:
    """Number shown in the order column, counted within the page; the hub shows infinity."""
    if row.is_hub(hub_location):
        return HUB_DISPLAY_NUMBER
    return str(position if hub_on_top else position + 1)


def column_total(
    rows: Sequence[Row],
    data_key: str,
    column_type: str,
    distance: Optional[DistanceSummary] = None,
) -> float:
    """Footer total for a column over the visible (filtered) rows."""
    if data_key == "no":
        return float(sum(row.no or 0 for row in rows))
    if data_key == "kilometer":
        return distance.total if distance is not None else 0.0
    if column_type == "currency" and data_key in CURRENCY_COLUMNS:
        return sum(parse_float_prefix(row.extra.get(data_key)) for row in rows)
    return 0.0


def column_totals(
    rows: Sequence[Row],
    columns: Sequence[Column] = DEFAULT_COLUMNS,
    distance: Optional[DistanceSummary] = None,
) -> dict[str, float]:
    ordered = sorted(columns, key=lambda column: column.sort_order)
    return {
        column.data_key: column_total(rows, column.data_key, column.type, distance)
        for column in ordered
        if column.type in TOTALLED_TYPES
    }


def build_table_view(
    rows: Sequence[Row],
    today: Weekday,
    view: ViewContext,
    *,
    column_sort: Optional[ColumnSort] = None,
    page: int = 1,
    page_size: Optional[int] = None,
    disable_pagination: bool = False,
    search: str = "",
    routes: Iterable[str] = (),
    hidden_deliveries: Iterable[str] = (),
    hub_location: Optional[str] = None,
) -> TableView:
    location = settings.hub_location if hub_location is None else hub_location
    page_size = page_size or settings.default_page_size

    visible = filter_rows(rows, search=search, routes=routes, hidden_deliveries=hidden_deliveries)
    hub = resolve_hub(rows, location)

    # Kilometer sorting uses distances along the incoming order, before the sort moves rows.
    incoming = None
    if column_sort is not None and column_sort.key == "kilometer":
        incoming = aggregate_distances(visible, hub, hub_location=location)
    ordered = sort_rows(
        visible,
        today,
        view,
        column_sort,
        distances=incoming.per_row if incoming else None,
        hub_location=location,
    )
    distance = aggregate_distances(ordered, hub, hub_location=location)

    current = paginate(ordered, page_size, page, disable_pagination=disable_pagination)
    hub_on_top = bool(current.rows) and current.rows[0].is_hub(location)

    row_views = [
        RowView(
            row=row,
            tier=classify(row, today, view),
            kilometer=distance.per_row.get(row.id),
            kilometer_display=format_distance(distance.per_row.get(row.id)),
            display_no=display_number(offset, row, hub_on_top, location),
            is_hub=row.is_hub(location),
        )
        for offset, row in enumerate(current.rows)
    ]

    return TableView(
        rows=row_views,
        page=current.page,
        page_size=current.page_size,
        page_count=current.page_count,
        total_rows=len(rows),
        filtered_rows=len(visible),
        distance=distance,
        window=page_window(current.page, current.page_count),
        route_options=route_options(rows),
        delivery_options=delivery_options(rows),
        sort=column_sort,
        totals=column_totals(ordered, distance=distance),
    )
