from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from ..domain.errors import InvalidStayError
from ..schemas import HotelPricingDocument, PricingInfoRead, StayQuoteRead, StayRateSummaryRead
from ..usecases import pricing as pricing_usecase
from ..utils.query_log import emit_query_log

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/daily-rates", response_model=PricingInfoRead)
async def resolve_daily_rates(
    payload: HotelPricingDocument,
    room_type: Optional[str] = Query(default=None, description="Room type name, case-insensitive"),
    date: Optional[str] = Query(default=None, description="Exact rate date, e.g. 2024-07-01"),
) -> PricingInfoRead:
    info = pricing_usecase.build_pricing_info(payload.as_hotel_data(), room_type=room_type, date=date)
    emit_query_log(
        action="pricing.resolved",
        result_count=len(info["dailyRates"]),
        extra={"room_type": room_type, "date": date},
    )
    return PricingInfoRead(
        date=date,
        room_type=room_type,
        daily_rates=info["dailyRates"],
        rules=info["rules"],
        discounts=info["discounts"],
    )


@router.post("/quote", response_model=StayQuoteRead)
async def quote_stay(
    payload: HotelPricingDocument,
    check_in: date = Query(..., description="First night (inclusive)"),
    check_out: date = Query(..., description="Departure day (exclusive)"),
    room_type: Optional[str] = Query(default=None),
) -> StayQuoteRead:
    try:
        quote = pricing_usecase.quote_stay(
            payload.as_hotel_data(),
            check_in=check_in,
            check_out=check_out,
            room_type=room_type,
        )
    except InvalidStayError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    summary = quote["summary"]
    emit_query_log(
        action="pricing.quoted",
        result_count=len(quote["dailyRates"]),
        available=summary.has_available_rooms,
        extra={"room_type": room_type, "check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
    )
    return StayQuoteRead(
        check_in=check_in,
        check_out=check_out,
        room_type=room_type,
        daily_rates=quote["dailyRates"],
        summary=StayRateSummaryRead.from_domain(summary),
    )
