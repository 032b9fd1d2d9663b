"""Conversion between stored records and ``Row`` objects."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models.domain import DeliveryAlt, Row

# Stored column name -> Row attribute. Both snake_case and the client's camelCase are accepted.
_ALIASES = {
    "id": "id",
    "no": "no",
    "order": "no",
    "route": "route",
    "code": "code",
    "location": "location",
    "delivery": "delivery",
    "delivery_alt": "delivery_alt",
    "deliveryalt": "delivery_alt",
    "active": "active",
    "latitude": "latitude",
    "lat": "latitude",
    "longitude": "longitude",
    "lng": "longitude",
    "lon": "longitude",
}


def _coerce_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse row order from value '{value}'") from exc


def _coerce_bool(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() not in {"false", "0", "no", "n", "inactive", "off"}


def _coerce_text(value: Optional[Any]) -> str:
    if value is None:
        return ""
    return str(value).strip()


def row_from_record(record: Mapping[str, Any]) -> Row:
    known: dict[str, Any] = {}
    extra: dict[str, Any] = {}
    for key, value in record.items():
        if key is None:
            continue
        attribute = _ALIASES.get(str(key).strip().lower())
        if attribute is None:
            extra[str(key)] = value
        elif attribute not in known:
            known[attribute] = value

    row_id = _coerce_text(known.get("id"))
    if not row_id:
        raise ValueError("Row record is missing an id.")

    return Row(
        id=row_id,
        no=_coerce_int(known.get("no")),
        route=_coerce_text(known.get("route")),
        code=_coerce_text(known.get("code")),
        location=_coerce_text(known.get("location")),
        delivery=_coerce_text(known.get("delivery")),
        delivery_alt=DeliveryAlt.parse(known.get("delivery_alt")),
        active=_coerce_bool(known.get("active")),
        latitude=known.get("latitude"),
        longitude=known.get("longitude"),
        extra=extra,
    )

