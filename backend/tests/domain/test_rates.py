import copy
from datetime import date
from typing import Any

import pytest
from hotel_inventory.domain.rates import (
    ByRoomTypeRates,
    LegacyRates,
    NoRates,
    match_room_type,
    parse_pricing_payload,
    rates_for_stay,
    resolve_daily_rates,
    room_type_refs,
    summarize_stay_rates,
)


def _rate(day: str, **overrides: Any) -> dict[str, Any]:
    row = {
        "date": day,
        "availableRooms": "3",
        "ppPrice": "100",
        "single": "150",
        "dbl": "200",
        "triple": "270",
    }
    row.update(overrides)
    return row


ROOM_TYPES = [{"id": "rt1", "name": "Standard Double"}, {"id": "rt2", "name": "Sea View Suite"}]


def _by_room_type() -> dict[str, Any]:
    return {
        "dailyRatesByRoomType": {
            "rt1": [_rate("2024-07-01")],
            "rt2": [_rate("2024-07-01", ppPrice="180")],
        }
    }


def test_merges_all_room_types_without_filter() -> None:
    rows = resolve_daily_rates(_by_room_type(), room_types=ROOM_TYPES)
    assert [row["roomTypeId"] for row in rows] == ["rt1", "rt2"]
    assert [row["roomTypeName"] for row in rows] == ["Standard Double", "Sea View Suite"]


def test_unknown_room_type_name_stamped_with_id() -> None:
    rows = resolve_daily_rates(_by_room_type())
    assert len(rows) == 2
    assert rows[0]["roomTypeId"] == "rt1"
    assert rows[0]["roomTypeName"] == "rt1"


def test_exact_name_match_returns_only_that_room_type() -> None:
    rows = resolve_daily_rates(_by_room_type(), room_type="sea view suite", room_types=ROOM_TYPES)
    assert len(rows) == 1
    assert rows[0]["roomTypeId"] == "rt2"
    assert rows[0]["ppPrice"] == "180"


def test_substring_match_used_when_no_exact_match() -> None:
    rows = resolve_daily_rates(_by_room_type(), room_type="DOUBLE", room_types=ROOM_TYPES)
    assert [row["roomTypeId"] for row in rows] == ["rt1"]


def test_exact_match_preferred_over_earlier_substring_match() -> None:
    refs = room_type_refs([{"id": "rt1", "name": "Suite Deluxe"}, {"id": "rt2", "name": "Suite"}])
    assert match_room_type("suite", refs) == refs[1]
    assert match_room_type("deluxe", refs) == refs[0]
    assert match_room_type("villa", refs) is None


def test_unresolved_filter_falls_back_to_all_room_types() -> None:
    rows = resolve_daily_rates(_by_room_type(), room_type="Deluxe", room_types=ROOM_TYPES)
    assert len(rows) == 2
    assert {row["roomTypeId"] for row in rows} == {"rt1", "rt2"}


def test_matched_room_type_without_rows_falls_back_to_all() -> None:
    room_types = ROOM_TYPES + [{"id": "rt3", "name": "Penthouse"}]
    rows = resolve_daily_rates(_by_room_type(), room_type="penthouse", room_types=room_types)
    assert len(rows) == 2


def test_legacy_key_passes_through_unstamped_without_filter() -> None:
    payload = {"dailyRatesByRoomType": {"_legacy": [_rate("2024-07-01")], "rt1": [_rate("2024-07-02")]}}
    rows = resolve_daily_rates(payload, room_types=ROOM_TYPES)
    assert "roomTypeId" not in rows[0]
    assert rows[1]["roomTypeId"] == "rt1"


def test_legacy_key_stamped_on_fallback_path() -> None:
    payload = {"dailyRatesByRoomType": {"_legacy": [_rate("2024-07-01")]}}
    rows = resolve_daily_rates(payload, room_type="Deluxe", room_types=ROOM_TYPES)
    assert rows[0]["roomTypeId"] == "_legacy"
    assert rows[0]["roomTypeName"] == "_legacy"


def test_flat_list_ignores_room_type_filter() -> None:
    payload = {"dailyRates": [_rate("2024-07-01"), _rate("2024-07-02")]}
    rows = resolve_daily_rates(payload, room_type="Sea View", room_types=ROOM_TYPES)
    assert rows == payload["dailyRates"]
    assert rows is not payload["dailyRates"]


def test_room_type_map_wins_over_flat_list() -> None:
    payload = _by_room_type()
    payload["dailyRates"] = [_rate("2024-08-01")]
    rows = resolve_daily_rates(payload)
    assert {row["date"] for row in rows} == {"2024-07-01"}


def test_empty_room_type_map_uses_flat_list() -> None:
    payload = {"dailyRatesByRoomType": {}, "dailyRates": [_rate("2024-08-01")]}
    assert isinstance(parse_pricing_payload(payload), LegacyRates)
    assert len(resolve_daily_rates(payload)) == 1


def test_malformed_payload_resolves_to_empty_list() -> None:
    assert isinstance(parse_pricing_payload({}), NoRates)
    assert isinstance(parse_pricing_payload(None), NoRates)
    assert isinstance(parse_pricing_payload({"dailyRates": "nope"}), NoRates)
    assert resolve_daily_rates({"rules": {}}) == []


def test_parsed_payload_accepted_as_is() -> None:
    payload = ByRoomTypeRates({"rt1": [_rate("2024-07-01")]})
    assert parse_pricing_payload(payload) is payload
    assert resolve_daily_rates(payload)[0]["roomTypeId"] == "rt1"


def test_date_filter_uses_exact_string_match() -> None:
    assert resolve_daily_rates(_by_room_type(), date="2024-07-02") == []
    assert len(resolve_daily_rates(_by_room_type(), date="2024-07-01")) == 2
    assert resolve_daily_rates({"dailyRates": [_rate("2024-07-01T00:00:00")]}, date="2024-07-01") == []


def test_resolution_is_pure_and_repeatable() -> None:
    payload = _by_room_type()
    snapshot = copy.deepcopy(payload)
    first = resolve_daily_rates(payload, room_type="suite", room_types=ROOM_TYPES, date="2024-07-01")
    second = resolve_daily_rates(payload, room_type="suite", room_types=ROOM_TYPES, date="2024-07-01")
    assert first == second
    assert payload == snapshot


def test_rates_for_stay_is_half_open_and_sorted() -> None:
    rows = [_rate("2024-07-03"), _rate("2024-07-01"), _rate("2024-07-04"), _rate("bad"), {"ppPrice": "1"}]
    stay = rates_for_stay(rows, check_in=date(2024, 7, 1), check_out=date(2024, 7, 4))
    assert [row["date"] for row in stay] == ["2024-07-01", "2024-07-03"]


def test_summarize_stay_rates() -> None:
    rows = [
        _rate("2024-07-01", availableRooms="0", ppPrice="0", single="120"),
        _rate("2024-07-02", availableRooms="2", ppPrice="95"),
    ]
    summary = summarize_stay_rates(rows)
    assert summary.has_available_rooms is True
    assert summary.lowest_price == 95.0


def test_summarize_without_prices_or_rooms() -> None:
    summary = summarize_stay_rates([{"date": "2024-07-01", "availableRooms": "", "single": "n/a"}])
    assert summary.has_available_rooms is False
    assert summary.lowest_price is None


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", "Infinity"])
def test_summarize_treats_non_finite_numbers_as_zero(value: str) -> None:
    rows = [
        {"date": "2024-07-01", "availableRooms": value, "ppPrice": value, "single": value},
        {"date": "2024-07-02", "availableRooms": "0", "ppPrice": "", "single": "140"},
    ]
    summary = summarize_stay_rates(rows)
    assert summary.has_available_rooms is False
    assert summary.lowest_price == 140.0
