"""Domain models for delivery rows and table columns."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Union


class Weekday(IntEnum):
    """Day of week, Sunday first (Sunday is 0)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class Tier(str, Enum):
    ON_SCHEDULE = "on-schedule"
    OFF_SCHEDULE = "off-schedule"
    INACTIVE = "inactive"


class DeliveryAlt(str, Enum):
    NORMAL = "normal"
    ALT1 = "alt1"
    ALT2 = "alt2"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value: Any) -> "DeliveryAlt":
        """Read a stored value, treating anything unknown as ``normal``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.NORMAL
        return cls.NORMAL


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1


CoordinateValue = Union[float, int, str, None]


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class Row:
    """A delivery stop as stored by the row store."""

    id: str
    no: int = 0
    route: str = ""
    code: str = ""
    location: str = ""
    delivery: str = ""
    delivery_alt: DeliveryAlt = DeliveryAlt.NORMAL
    active: bool = True
    latitude: CoordinateValue = None
    longitude: CoordinateValue = None
    extra: dict = field(default_factory=dict)

    def is_hub(self, hub_location: str) -> bool:
        return bool(hub_location) and self.location == hub_location


@dataclass(slots=True, frozen=True)
class Column:
    """Describes a table field for display, sorting and editing."""

    id: str
    data_key: str
    label: str
    type: str = "text"
    sort_order: int = 0


@dataclass(slots=True, frozen=True)
class ColumnSort:
    key: str
    direction: SortDirection = SortDirection.ASC


@dataclass(slots=True, frozen=True)
class RowOrderAssignment:
    row_id: str
    no: int


@dataclass(slots=True, frozen=True)
class ViewContext:
    """Rendering context: tiered views apply the three-tier schedule grouping."""

    tiered: bool = False

    @classmethod
    def for_view(cls, shared: bool = False, edit_mode: bool = False) -> "ViewContext":
        return cls(tiered=shared or edit_mode)

