from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from ..domain.errors import InvalidStayError
from ..domain.rates import rates_for_stay, resolve_daily_rates, summarize_stay_rates


def _pricing_section(hotel_data: Mapping[str, Any]) -> Mapping[str, Any]:
    pricing = hotel_data.get("pricing") or {}
    return pricing if isinstance(pricing, Mapping) else {}


def build_pricing_info(
    hotel_data: Mapping[str, Any],
    *,
    room_type: Optional[str] = None,
    date: Optional[str] = None,
) -> Dict[str, Any]:
    """Daily rates plus the hotel's free-form rules and discounts."""
    pricing = _pricing_section(hotel_data)
    daily_rates = resolve_daily_rates(
        pricing,
        room_type=room_type,
        room_types=hotel_data.get("roomTypes") or [],
        date=date,
    )
    return {
        "dailyRates": daily_rates,
        "rules": pricing.get("rules") or {},
        "discounts": pricing.get("discounts") or [],
    }


def quote_stay(
    hotel_data: Mapping[str, Any],
    *,
    check_in: date | datetime,
    check_out: date | datetime,
    room_type: Optional[str] = None,
) -> Dict[str, Any]:
    if check_in >= check_out:
        raise InvalidStayError("check_in must be earlier than check_out")
    daily_rates = resolve_daily_rates(
        _pricing_section(hotel_data),
        room_type=room_type,
        room_types=hotel_data.get("roomTypes") or [],
    )
    stay_rates = rates_for_stay(daily_rates, check_in=check_in, check_out=check_out)
    return {"dailyRates": stay_rates, "summary": summarize_stay_rates(stay_rates)}
