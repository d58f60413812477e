"""Daily rate normalization.

Hotel pricing documents arrive in two shapes: the legacy flat ``dailyRates``
list and the per-room-type ``dailyRatesByRoomType`` map. Both are parsed into
a tagged payload at the boundary and resolved into one flat list of rate rows,
each a plain dict carrying ``date``, ``availableRooms``, ``ppPrice``,
``single``, ``dbl``, ``triple`` and, once attributed, ``roomTypeId`` and
``roomTypeName``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date as date_type
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

DailyRate = dict[str, Any]

LEGACY_KEY = "_legacy"
PRICE_FIELDS = ("ppPrice", "single", "dbl", "triple")


@dataclass(frozen=True)
class ByRoomTypeRates:
    rates_by_room_type: Mapping[str, Sequence[Mapping[str, Any]]]


@dataclass(frozen=True)
class LegacyRates:
    rates: Sequence[Mapping[str, Any]]


@dataclass(frozen=True)
class NoRates:
    pass


PricingPayload = Union[ByRoomTypeRates, LegacyRates, NoRates]


@dataclass(frozen=True)
class RoomTypeRef:
    id: str
    name: str


@dataclass(frozen=True)
class StayRateSummary:
    has_available_rooms: bool
    lowest_price: Optional[float]


def _rows(value: Any) -> list[Mapping[str, Any]]:
    """Shallow copy of a rate list; elements that are not mappings are dropped."""
    if not isinstance(value, (list, tuple)):
        return []
    return [row for row in value if isinstance(row, Mapping)]


def parse_pricing_payload(pricing_data: Any) -> PricingPayload:
    """Tag a raw pricing document; a non-empty per-room-type map wins over the flat list.

    Rate lists of either shape are copied shallowly, keeping only mapping rows.
    """
    if isinstance(pricing_data, (ByRoomTypeRates, LegacyRates, NoRates)):
        return pricing_data
    if not isinstance(pricing_data, Mapping):
        return NoRates()

    by_room_type = pricing_data.get("dailyRatesByRoomType")
    if isinstance(by_room_type, Mapping) and by_room_type:
        return ByRoomTypeRates({str(key): _rows(rows) for key, rows in by_room_type.items()})

    flat = pricing_data.get("dailyRates")
    if isinstance(flat, (list, tuple)):
        return LegacyRates(_rows(flat))
    return NoRates()


def room_type_refs(room_types: Iterable[Any]) -> list[RoomTypeRef]:
    refs: list[RoomTypeRef] = []
    for item in room_types or ():
        if isinstance(item, RoomTypeRef):
            refs.append(item)
        elif isinstance(item, Mapping) and item.get("id") is not None:
            refs.append(RoomTypeRef(id=str(item["id"]), name=str(item.get("name") or "")))
        elif hasattr(item, "id") and hasattr(item, "name"):
            refs.append(RoomTypeRef(id=str(item.id), name=str(item.name or "")))
    return refs


def match_room_type(name: str, room_types: Sequence[RoomTypeRef]) -> RoomTypeRef | None:
    """Case-insensitive exact name match first, then first name containing ``name``."""
    needle = name.lower()
    named = [rt for rt in room_types if rt.name]
    for rt in named:
        if rt.name.lower() == needle:
            return rt
    for rt in named:
        if needle in rt.name.lower():
            return rt
    return None


def _stamp(rows: Iterable[Mapping[str, Any]], room_type_id: str, room_type_name: str) -> list[DailyRate]:
    return [{**row, "roomTypeId": room_type_id, "roomTypeName": room_type_name} for row in rows]


def _merge_all(
    payload: ByRoomTypeRates,
    room_types: Sequence[RoomTypeRef],
    *,
    stamp_legacy: bool,
) -> list[DailyRate]:
    names = {rt.id: rt.name for rt in room_types}
    merged: list[DailyRate] = []
    for room_type_id, rows in payload.rates_by_room_type.items():
        if room_type_id == LEGACY_KEY and not stamp_legacy:
            merged.extend(dict(row) for row in rows)
            continue
        merged.extend(_stamp(rows, room_type_id, names.get(room_type_id) or room_type_id))
    return merged


def resolve_daily_rates(
    pricing_data: Any,
    *,
    room_type: Optional[str] = None,
    room_types: Iterable[Any] = (),
    date: Optional[str] = None,
) -> list[DailyRate]:
    """
    Flatten a pricing document into daily rate rows.

    A ``room_type`` filter that cannot be resolved against ``room_types``
    falls back to every room type's rows instead of returning nothing. The
    legacy flat list ignores the filter. ``date`` is compared as a plain
    string. Input rows are copied, never modified.
    """
    payload = parse_pricing_payload(pricing_data)
    refs = room_type_refs(room_types)
    rates: list[DailyRate]

    if isinstance(payload, ByRoomTypeRates):
        if room_type and refs:
            matched = match_room_type(room_type, refs)
            if matched is not None and matched.id in payload.rates_by_room_type:
                rates = _stamp(payload.rates_by_room_type[matched.id], matched.id, matched.name)
            else:
                rates = _merge_all(payload, refs, stamp_legacy=True)
        else:
            rates = _merge_all(payload, refs, stamp_legacy=False)
    elif isinstance(payload, LegacyRates):
        rates = [dict(row) for row in payload.rates]
    else:
        rates = []

    if date:
        rates = [row for row in rates if row.get("date") == date]
    return rates


def _as_date(value: Any) -> date_type | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def rates_for_stay(
    rates: Iterable[Mapping[str, Any]],
    *,
    check_in: date_type | datetime,
    check_out: date_type | datetime,
) -> list[DailyRate]:
    """Rows dated within [check_in, check_out), ordered by date; undated rows are dropped."""
    start = _as_date(check_in)
    end = _as_date(check_out)
    dated: list[tuple[date_type, DailyRate]] = []
    for row in rates:
        row_date = _as_date(row.get("date"))
        if row_date is None or start is None or end is None:
            continue
        if start <= row_date < end:
            dated.append((row_date, dict(row)))
    dated.sort(key=lambda item: item[0])
    return [row for _, row in dated]


def _to_number(value: Any) -> float:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def summarize_stay_rates(rates: Iterable[Mapping[str, Any]]) -> StayRateSummary:
    has_rooms = False
    lowest: Optional[float] = None
    for row in rates:
        if int(_to_number(row.get("availableRooms"))) > 0:
            has_rooms = True
        prices = [p for p in (_to_number(row.get(field)) for field in PRICE_FIELDS) if p > 0]
        if prices and (lowest is None or min(prices) < lowest):
            lowest = min(prices)
    return StayRateSummary(has_available_rooms=has_rooms, lowest_price=lowest)
