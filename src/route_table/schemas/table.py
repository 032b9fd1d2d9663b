"""Table view and reorder request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..persistence.base import NON_NULLABLE_FIELDS

SortColumn = Literal["code", "kilometer", "order", "route", "location", "delivery"]
Direction = Literal["asc", "desc"]
DeliveryAltValue = Literal["normal", "alt1", "alt2", "inactive"]


class RowModel(BaseModel):
    id: str
    no: int
    route: str
    code: str
    location: str
    delivery: str
    delivery_alt: str
    active: bool
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None
    extra: dict = Field(default_factory=dict)


class RowViewModel(BaseModel):
    row: RowModel
    tier: Literal["on-schedule", "off-schedule", "inactive"]
    kilometer: Optional[float] = Field(None, description="Cumulative km along the displayed order; null without coordinates.")
    kilometer_display: str
    display_no: str
    is_hub: bool


class PageWindowModel(BaseModel):
    pages: List[int]
    show_first: bool
    show_last: bool


class SortModel(BaseModel):
    column: SortColumn
    direction: Direction = "asc"


class TableViewResponse(BaseModel):
    weekday: int
    tiered: bool
    rows: List[RowViewModel]
    page: int
    page_size: int
    page_count: int
    total_rows: int
    filtered_rows: int
    total_distance_km: float
    return_leg_km: Optional[float] = None
    window: PageWindowModel
    route_options: List[str]
    delivery_options: List[str]
    sort: Optional[SortModel] = None
    totals: Dict[str, float] = Field(default_factory=dict, description="Footer totals for number and currency columns.")


class ReorderRequest(BaseModel):
    ids: List[str] = Field(..., min_length=1, description="Every row id, in the new order.")


class RowOrderModel(BaseModel):
    id: str
    no: int


class ReorderResponse(BaseModel):
    updated: int
    order: List[RowOrderModel]


class MoveRowRequest(BaseModel):
    """Drag result over the currently displayed order (indices are 0-based, table-wide)."""

    source_index: int = Field(..., ge=0)
    destination_index: int = Field(..., ge=0)
    ids: Optional[List[str]] = Field(
        default=None,
        description="Displayed id order the drag was made on; defaults to the stored order.",
    )


class SortRequest(SortModel):
    """Persist a column sort as the new stored order."""


class RowUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    no: Optional[int] = None
    route: Optional[str] = None
    code: Optional[str] = None
    location: Optional[str] = None
    delivery: Optional[str] = None
    delivery_alt: Optional[DeliveryAltValue] = None
    active: Optional[bool] = None
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None

    @model_validator(mode="after")
    def _reject_null_fields(self) -> "RowUpdateRequest":
        """Only coordinates may be cleared with an explicit null."""
        nulled = sorted(
            name for name in self.model_fields_set if name in NON_NULLABLE_FIELDS and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self
