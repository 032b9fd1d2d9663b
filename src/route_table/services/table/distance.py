"""Cumulative travel distance along the displayed row order."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import Coordinate, Row
from ..geospatial import distance_between, row_coordinate

DISTANCE_SENTINEL = "—"


@dataclass(slots=True)
class DistanceSummary:
    """Per-row cumulative kilometers (``None`` when a row has no usable coordinates)."""

    per_row: dict[str, Optional[float]] = field(default_factory=dict)
    total: float = 0.0
    return_leg_km: Optional[float] = None
    last_stop_id: Optional[str] = None


def resolve_hub(rows: Sequence[Row], hub_location: Optional[str] = None) -> Coordinate | None:
    """Coordinates of the first hub row, if it carries valid ones."""
    location = settings.hub_location if hub_location is None else hub_location
    for row in rows:
        if row.is_hub(location):
            return row_coordinate(row)
    return None


def aggregate_distances(
    ordered_rows: Sequence[Row],
    hub: Coordinate | None,
    *,
    hub_location: Optional[str] = None,
) -> DistanceSummary:
    """Walk the stops in order and accumulate haversine legs.

    The hub row never takes part in the stop chain; its coordinate is only
    used for the closing leg from the last stop back to the hub.
    """
    location = settings.hub_location if hub_location is None else hub_location
    summary = DistanceSummary()

    cumulative = 0.0
    previous: Coordinate | None = None
    for row in ordered_rows:
        coordinate = None if row.is_hub(location) else row_coordinate(row)
        if coordinate is None:
            summary.per_row[row.id] = None
            continue
        if previous is not None:
            cumulative += distance_between(previous, coordinate)
        summary.per_row[row.id] = cumulative
        summary.last_stop_id = row.id
        previous = coordinate

    summary.total = cumulative
    if previous is not None and hub is not None:
        summary.return_leg_km = distance_between(previous, hub)
        summary.total = cumulative + summary.return_leg_km
    return summary


def format_distance(value: Optional[float]) -> str:
    if value is None:
        return DISTANCE_SENTINEL
    return f"{value:.2f} km"
