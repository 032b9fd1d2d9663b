import pytest

from src.route_table.models.domain import Column, ColumnSort, DeliveryAlt, Row, SortDirection, Tier, ViewContext, Weekday
from src.route_table.services.geospatial import haversine_km
from src.route_table.services.table.view import build_table_view, column_total, column_totals

HUB = "QL Kitchen"


def _row(rid: str, no: int, lat=None, lon=None, location: str | None = None, **kwargs) -> Row:
    return Row(
        id=rid,
        no=no,
        route=kwargs.pop("route", "KL 1"),
        code=kwargs.pop("code", str(no)),
        location=location or f"Stop {rid}",
        delivery=kwargs.pop("delivery", "Daily"),
        latitude=lat,
        longitude=lon,
        **kwargs,
    )


def _rows() -> list[Row]:
    return [
        _row("S1", 1, 3.1390, 101.6869),
        _row("S2", 2, 3.1500, 101.7000, delivery_alt=DeliveryAlt.ALT1),
        _row("hub", 3, 3.1200, 101.6800, location=HUB),
        _row("S3", 4, None, None),
        _row("S4", 5, 3.1600, 101.7100, active=False, extra={"tollPrice": "2.50"}),
    ]


def test_tiered_view_orders_tiers_and_pins_hub():
    table = build_table_view(_rows(), Weekday.TUESDAY, ViewContext(tiered=True), hub_location=HUB)

    assert [item.row.id for item in table.rows] == ["hub", "S1", "S3", "S2", "S4"]
    assert [item.tier for item in table.rows] == [
        Tier.ON_SCHEDULE,
        Tier.ON_SCHEDULE,
        Tier.ON_SCHEDULE,
        Tier.OFF_SCHEDULE,
        Tier.INACTIVE,
    ]
    assert [item.display_no for item in table.rows] == ["∞", "1", "2", "3", "4"]
    assert table.rows[0].is_hub


def test_distances_follow_displayed_order():
    table = build_table_view(_rows(), Weekday.TUESDAY, ViewContext(tiered=True), hub_location=HUB)
    by_id = {item.row.id: item for item in table.rows}

    s1_s2 = haversine_km(3.1390, 101.6869, 3.1500, 101.7000)
    s2_s4 = haversine_km(3.1500, 101.7000, 3.1600, 101.7100)
    s4_hub = haversine_km(3.1600, 101.7100, 3.1200, 101.6800)

    assert by_id["hub"].kilometer is None
    assert by_id["S3"].kilometer_display == "—"
    assert by_id["S1"].kilometer == 0.0
    assert by_id["S2"].kilometer == pytest.approx(s1_s2)
    assert by_id["S4"].kilometer == pytest.approx(s1_s2 + s2_s4)
    assert table.total_distance_km == pytest.approx(s1_s2 + s2_s4 + s4_hub)


def test_filters_and_pagination_are_applied():
    table = build_table_view(
        _rows(),
        Weekday.MONDAY,
        ViewContext(tiered=False),
        page=2,
        page_size=2,
        hidden_deliveries=["Weekday"],
        search="s",
        hub_location=HUB,
    )

    assert table.total_rows == 5
    assert table.filtered_rows == 4
    assert table.page == 2
    assert table.page_count == 2
    assert [item.row.id for item in table.rows] == ["S3", "S4"]
    assert [item.display_no for item in table.rows] == ["1", "2"]
    assert table.route_options == ["KL 1"]


def test_display_numbers_are_counted_within_each_page():
    first = build_table_view(_rows(), Weekday.TUESDAY, ViewContext(tiered=True), page_size=2, hub_location=HUB)
    second = build_table_view(
        _rows(), Weekday.TUESDAY, ViewContext(tiered=True), page=2, page_size=2, hub_location=HUB
    )

    assert [item.display_no for item in first.rows] == ["∞", "1"]
    assert [(item.row.id, item.display_no) for item in second.rows] == [("S3", "1"), ("S2", "2")]


def test_page_out_of_range_is_clamped():
    table = build_table_view(_rows(), Weekday.MONDAY, ViewContext(), page=40, page_size=2, hub_location=HUB)

    assert table.page == 3
    assert len(table.rows) == 1


def test_column_sort_with_hub_on_top():
    table = build_table_view(
        _rows(),
        Weekday.MONDAY,
        ViewContext(tiered=False),
        column_sort=ColumnSort("code", SortDirection.DESC),
        hub_location=HUB,
    )

    assert [item.row.id for item in table.rows] == ["hub", "S3", "S2", "S1", "S4"]
    assert table.sort == ColumnSort("code", SortDirection.DESC)


def test_kilometer_sort_uses_incoming_order_distances():
    rows = [
        _row("far", 1, 3.2000, 101.8000),
        _row("start", 2, 3.1000, 101.6000),
        _row("mid", 3, 3.1500, 101.7000),
    ]

    table = build_table_view(
        rows,
        Weekday.MONDAY,
        ViewContext(),
        column_sort=ColumnSort("kilometer", SortDirection.ASC),
        hub_location=HUB,
    )

    assert [item.row.id for item in table.rows] == ["far", "start", "mid"]


def test_column_totals():
    table = build_table_view(_rows(), Weekday.TUESDAY, ViewContext(tiered=True), hub_location=HUB)
    rows = [item.row for item in table.rows]

    assert column_total(rows, "no", "number") == 15
    assert column_total(rows, "kilometer", "number", table.distance) == table.total_distance_km
    assert column_total(rows, "tollPrice", "currency") == pytest.approx(2.5)
    assert column_total(rows, "route", "text") == 0


def test_view_carries_footer_totals_for_number_and_currency_columns():
    table = build_table_view(_rows(), Weekday.TUESDAY, ViewContext(tiered=True), hub_location=HUB)

    assert table.totals["no"] == 15
    assert table.totals["kilometer"] == pytest.approx(table.total_distance_km)
    assert table.totals["tollPrice"] == pytest.approx(2.5)
    assert "route" not in table.totals


def test_column_totals_follow_column_sort_order():
    columns = [
        Column(id="km", data_key="kilometer", label="Km", type="number", sort_order=2),
        Column(id="no", data_key="no", label="No", type="number", sort_order=1),
        Column(id="loc", data_key="location", label="Location", sort_order=0),
    ]

    totals = column_totals(_rows(), columns)

    assert list(totals) == ["no", "kilometer"]
    assert totals["kilometer"] == 0.0
