from itertools import permutations

from src.route_table.models.domain import ColumnSort, DeliveryAlt, Row, SortDirection, ViewContext, Weekday
from src.route_table.services.table.sorter import (
    column_sort_ids,
    parse_float_prefix,
    parse_int_prefix,
    sort_rows,
    toggle_sort,
)

HUB = "QL Kitchen"
TIERED = ViewContext(tiered=True)
PLAIN = ViewContext(tiered=False)


def _row(
    rid: str,
    code: str = "",
    route: str = "R1",
    location: str | None = None,
    delivery_alt=DeliveryAlt.NORMAL,
    active: bool = True,
    no: int = 0,
) -> Row:
    return Row(
        id=rid,
        no=no,
        route=route,
        code=code,
        location=location if location is not None else f"Stop {rid}",
        delivery="Daily",
        delivery_alt=delivery_alt,
        active=active,
    )


def _ids(rows):
    return [row.id for row in rows]


def test_tiered_sort_groups_on_schedule_first():
    rows = [_row("A", active=False), _row("B", delivery_alt=DeliveryAlt.ALT1), _row("C")]

    ordered = sort_rows(rows, Weekday.TUESDAY, TIERED, hub_location=HUB)

    assert _ids(ordered) == ["C", "B", "A"]


def test_code_sort_parses_numbers_and_defaults_to_zero():
    rows = [_row("ten", code="10"), _row("two", code="2"), _row("abc", code="abc")]

    ordered = sort_rows(rows, Weekday.MONDAY, PLAIN, ColumnSort("code", SortDirection.ASC), hub_location=HUB)

    assert [row.code for row in ordered] == ["abc", "2", "10"]


def test_equal_keys_keep_input_order_in_both_directions():
    rows = [_row("first", code="5"), _row("x", code="1"), _row("second", code="5"), _row("third", code="5")]

    ascending = sort_rows(rows, Weekday.MONDAY, PLAIN, ColumnSort("code", SortDirection.ASC), hub_location=HUB)
    descending = sort_rows(rows, Weekday.MONDAY, PLAIN, ColumnSort("code", SortDirection.DESC), hub_location=HUB)

    assert _ids(ascending) == ["x", "first", "second", "third"]
    assert _ids(descending) == ["first", "second", "third", "x"]


def test_stability_follows_upstream_order_not_ids():
    first = [_row("b", route="Same"), _row("a", route="Same")]
    second = list(reversed(first))
    column = ColumnSort("route", SortDirection.ASC)

    assert _ids(sort_rows(first, Weekday.MONDAY, PLAIN, column, hub_location=HUB)) == ["b", "a"]
    assert _ids(sort_rows(second, Weekday.MONDAY, PLAIN, column, hub_location=HUB)) == ["a", "b"]


def test_text_sort_is_case_insensitive():
    rows = [_row("1", route="beta"), _row("2", route="Alpha"), _row("3", route="alpha"), _row("4", route="Gamma")]

    ordered = sort_rows(rows, Weekday.MONDAY, PLAIN, ColumnSort("route", SortDirection.ASC), hub_location=HUB)

    assert [row.route for row in ordered] == ["alpha", "Alpha", "beta", "Gamma"]


def test_column_sort_stays_inside_tier_buckets():
    rows = [
        _row("off", code="1", delivery_alt=DeliveryAlt.ALT2),
        _row("on-high", code="9"),
        _row("inactive", code="0", active=False),
        _row("on-low", code="3"),
    ]

    ordered = sort_rows(rows, Weekday.MONDAY, TIERED, ColumnSort("code", SortDirection.ASC), hub_location=HUB)

    assert _ids(ordered) == ["on-low", "on-high", "off", "inactive"]


def test_plain_view_only_sinks_inactive_rows():
    rows = [
        _row("gone", active=False),
        _row("alt", delivery_alt=DeliveryAlt.ALT1),
        _row("normal"),
    ]

    ordered = sort_rows(rows, Weekday.TUESDAY, PLAIN, hub_location=HUB)

    assert _ids(ordered) == ["alt", "normal", "gone"]


def test_sort_is_idempotent():
    rows = [
        _row("A", code="7", delivery_alt=DeliveryAlt.ALT1),
        _row("B", code="3"),
        _row("hub", code="99", location=HUB),
        _row("C", code="3", active=False),
        _row("D", code="1"),
    ]
    column = ColumnSort("code", SortDirection.DESC)

    once = sort_rows(rows, Weekday.TUESDAY, TIERED, column, hub_location=HUB)
    twice = sort_rows(once, Weekday.TUESDAY, TIERED, column, hub_location=HUB)

    assert _ids(once) == _ids(twice)
    assert _ids(sort_rows(rows, Weekday.TUESDAY, TIERED, column, hub_location=HUB)) == _ids(once)


def test_active_hub_is_pinned_for_every_permutation():
    rows = [
        _row("hub", code="50", route="Zulu", location=HUB),
        _row("A", code="1", route="Alpha"),
        _row("B", code="2", route="Bravo", delivery_alt=DeliveryAlt.ALT1),
        _row("C", code="3", route="Charlie"),
    ]
    column = ColumnSort("route", SortDirection.ASC)

    for permutation in permutations(rows):
        for view in (TIERED, PLAIN):
            assert sort_rows(list(permutation), Weekday.TUESDAY, view, column, hub_location=HUB)[0].id == "hub"
            assert sort_rows(list(permutation), Weekday.TUESDAY, view, hub_location=HUB)[0].id == "hub"


def test_inactive_hub_is_not_pinned():
    rows = [_row("A"), _row("hub", location=HUB, active=False), _row("B")]

    ordered = sort_rows(rows, Weekday.MONDAY, TIERED, hub_location=HUB)

    assert _ids(ordered) == ["A", "B", "hub"]


def test_kilometer_sort_uses_supplied_distances():
    rows = [_row("far"), _row("none"), _row("near")]
    distances = {"far": 12.5, "near": 1.25, "none": None}

    ordered = sort_rows(
        rows,
        Weekday.MONDAY,
        PLAIN,
        ColumnSort("kilometer", SortDirection.ASC),
        distances=distances,
        hub_location=HUB,
    )

    assert _ids(ordered) == ["none", "near", "far"]


def test_order_sort_and_unknown_column():
    rows = [_row("third", no=3), _row("first", no=1), _row("second", no=2)]

    by_order = sort_rows(rows, Weekday.MONDAY, PLAIN, ColumnSort("order", SortDirection.DESC), hub_location=HUB)
    unknown = sort_rows(rows, Weekday.MONDAY, PLAIN, ColumnSort("images", SortDirection.ASC), hub_location=HUB)

    assert _ids(by_order) == ["third", "second", "first"]
    assert _ids(unknown) == ["third", "first", "second"]


def test_column_sort_ids_ignores_tiers_and_hub():
    rows = [_row("hub", code="9", location=HUB), _row("A", code="2", active=False), _row("B", code="1")]

    ids = column_sort_ids(rows, ColumnSort("code", SortDirection.ASC))

    assert ids == ["B", "A", "hub"]


def test_toggle_sort_cycles_through_directions():
    state = toggle_sort(None, "route")
    assert state == ColumnSort("route", SortDirection.ASC)

    state = toggle_sort(state, "route")
    assert state == ColumnSort("route", SortDirection.DESC)

    assert toggle_sort(state, "route") is None
    assert toggle_sort(state, "code") == ColumnSort("code", SortDirection.ASC)


def test_numeric_prefix_parsing():
    assert parse_int_prefix("12abc") == 12
    assert parse_int_prefix(" -3") == -3
    assert parse_int_prefix("abc") == 0
    assert parse_int_prefix(None) == 0
    assert parse_float_prefix("4.5 km") == 4.5
    assert parse_float_prefix("—") == 0.0
    assert parse_float_prefix(float("nan")) == 0.0
