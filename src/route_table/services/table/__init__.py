"""Row ordering and scheduling engine for the delivery table."""

from .distance import DistanceSummary, aggregate_distances, format_distance, resolve_hub
from .filters import delivery_options, filter_rows, route_options
from .paginator import Page, Paginator, page_window, paginate
from .reorder import ReorderError, ReorderPersistence, assign_order, move_row
from .sorter import column_sort_ids, sort_rows, toggle_sort
from .view import DEFAULT_COLUMNS, TableView, build_table_view, column_total, column_totals

__all__ = [
    "DistanceSummary",
    "aggregate_distances",
    "format_distance",
    "resolve_hub",
    "filter_rows",
    "route_options",
    "delivery_options",
    "Page",
    "Paginator",
    "paginate",
    "page_window",
    "ReorderError",
    "ReorderPersistence",
    "assign_order",
    "move_row",
    "sort_rows",
    "column_sort_ids",
    "toggle_sort",
    "TableView",
    "build_table_view",
    "column_total",
    "column_totals",
    "DEFAULT_COLUMNS",
]
