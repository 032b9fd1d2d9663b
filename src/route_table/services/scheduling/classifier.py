"""Schedule tier classification for delivery rows."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from ...models.domain import DeliveryAlt, Row, Tier, ViewContext, Weekday

ALT1_DAYS = frozenset({Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY, Weekday.SUNDAY})
ALT2_DAYS = frozenset({Weekday.TUESDAY, Weekday.THURSDAY, Weekday.SATURDAY})

# Weekday-only deliveries are skipped on these days in tiered views.
WEEKDAY_DELIVERY = "Weekday"
WEEKDAY_DELIVERY_OFF_DAYS = frozenset({Weekday.FRIDAY, Weekday.SATURDAY})

TIER_PRIORITY = {
    Tier.ON_SCHEDULE: 0,
    Tier.OFF_SCHEDULE: 1,
    Tier.INACTIVE: 2,
}


def weekday_of(day: date) -> Weekday:
    """Map a date to the Sunday-first weekday numbering."""
    return Weekday((day.weekday() + 1) % 7)


def current_weekday(timezone: str) -> Weekday:
    return weekday_of(datetime.now(ZoneInfo(timezone)).date())


def is_inactive(row: Row) -> bool:
    return row.active is False or DeliveryAlt.parse(row.delivery_alt) is DeliveryAlt.INACTIVE


def classify(row: Row, today: Weekday, view: ViewContext) -> Tier:
    """Classify a row into its schedule tier for ``today``.

    Outside tiered views only the active/inactive split applies, so
    ``Tier.OFF_SCHEDULE`` is never returned there.
    """
    if is_inactive(row):
        return Tier.INACTIVE
    if not view.tiered:
        return Tier.ON_SCHEDULE

    delivery_alt = DeliveryAlt.parse(row.delivery_alt)
    if delivery_alt is DeliveryAlt.ALT1 and today not in ALT1_DAYS:
        return Tier.OFF_SCHEDULE
    if delivery_alt is DeliveryAlt.ALT2 and today not in ALT2_DAYS:
        return Tier.OFF_SCHEDULE
    if row.delivery == WEEKDAY_DELIVERY and today in WEEKDAY_DELIVERY_OFF_DAYS:
        return Tier.OFF_SCHEDULE
    return Tier.ON_SCHEDULE


def delivery_alt_update(value: str) -> dict:
    """Partial update for a delivery-alternate change; ``inactive`` also deactivates the row."""
    delivery_alt = DeliveryAlt.parse(value)
    return {"delivery_alt": delivery_alt.value, "active": delivery_alt is not DeliveryAlt.INACTIVE}
