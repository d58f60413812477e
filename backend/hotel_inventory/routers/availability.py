from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import Settings
from ..deps import get_app_settings, get_customer_id, get_reservation_repo, get_room_type_repo
from ..domain.errors import InvalidStayError
from ..domain.repositories import ReservationRepository, RoomTypeRepository
from ..schemas import AlternativeDatesRead, AvailabilityRead, AvailableRoomTypeRead
from ..usecases import availability as availability_usecase
from ..utils.query_log import emit_query_log
from ..utils.time import to_utc_naive

router = APIRouter(prefix="/room-types", tags=["availability"])


def _stay_window(check_in: datetime, check_out: datetime) -> tuple[datetime, datetime]:
    if check_in.tzinfo is None or check_out.tzinfo is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="check_in/check_out must have timezone")
    return to_utc_naive(check_in), to_utc_naive(check_out)


@router.get("/available", response_model=List[AvailableRoomTypeRead])
async def list_available_room_types(
    check_in: datetime = Query(..., description="Stay start (ISO 8601, inclusive)"),
    check_out: datetime = Query(..., description="Stay end (ISO 8601, exclusive)"),
    guests: int = Query(default=1, ge=1),
    customer_id: str = Depends(get_customer_id),
    room_type_repo: RoomTypeRepository = Depends(get_room_type_repo),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
) -> list[AvailableRoomTypeRead]:
    utc_in, utc_out = _stay_window(check_in, check_out)
    try:
        rows = await availability_usecase.list_available_room_types(
            room_type_repo,
            res_repo,
            customer_id=customer_id,
            check_in=utc_in,
            check_out=utc_out,
            guests_needed=guests,
        )
    except InvalidStayError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    emit_query_log(
        action="availability.listed",
        customer_id=customer_id,
        check_in=utc_in,
        check_out=utc_out,
        result_count=len(rows),
    )
    return [AvailableRoomTypeRead.from_db(room_type=rt, result=result) for rt, result in rows]


@router.get("/{room_type_id}/availability", response_model=AvailabilityRead)
async def check_availability(
    room_type_id: str,
    check_in: datetime = Query(..., description="Stay start (ISO 8601, inclusive)"),
    check_out: datetime = Query(..., description="Stay end (ISO 8601, exclusive)"),
    rooms: int = Query(default=1, ge=1),
    room_type_repo: RoomTypeRepository = Depends(get_room_type_repo),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
) -> AvailabilityRead:
    utc_in, utc_out = _stay_window(check_in, check_out)
    try:
        result = await availability_usecase.check_availability(
            room_type_repo,
            res_repo,
            room_type_id=room_type_id,
            check_in=utc_in,
            check_out=utc_out,
            rooms_needed=rooms,
        )
    except InvalidStayError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    emit_query_log(
        action="availability.checked",
        room_type_id=room_type_id,
        check_in=utc_in,
        check_out=utc_out,
        available=result.available,
        extra={"rooms_needed": rooms, "available_rooms": result.available_rooms},
    )
    return AvailabilityRead.from_result(room_type_id=room_type_id, result=result)


@router.get("/{room_type_id}/alternatives", response_model=List[AlternativeDatesRead])
async def suggest_alternative_dates(
    room_type_id: str,
    check_in: datetime = Query(..., description="Preferred stay start (ISO 8601)"),
    check_out: datetime = Query(..., description="Preferred stay end (ISO 8601)"),
    rooms: int = Query(default=1, ge=1),
    days: int | None = Query(default=None, ge=1, le=90, description="Days searched either side"),
    settings: Settings = Depends(get_app_settings),
    room_type_repo: RoomTypeRepository = Depends(get_room_type_repo),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
) -> list[AlternativeDatesRead]:
    utc_in, utc_out = _stay_window(check_in, check_out)
    try:
        alternatives = await availability_usecase.suggest_alternative_dates(
            room_type_repo,
            res_repo,
            room_type_id=room_type_id,
            preferred_check_in=utc_in,
            preferred_check_out=utc_out,
            rooms_needed=rooms,
            days_to_search=days or settings.alternative_search_days,
            limit=settings.max_alternatives,
        )
    except InvalidStayError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    emit_query_log(
        action="availability.alternatives",
        room_type_id=room_type_id,
        check_in=utc_in,
        check_out=utc_out,
        result_count=len(alternatives),
    )
    return [AlternativeDatesRead.from_domain(alt) for alt in alternatives]
