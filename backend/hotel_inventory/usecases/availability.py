import asyncio
import logging
from datetime import datetime
from typing import List, Tuple

from ..domain.repositories import ReservationRepository, RoomTypeRepository
from ..domain.services import (
    AlternativeDates,
    AvailabilityResult,
    compute_availability,
    rank_alternatives,
    shifted_windows,
    validate_stay,
)
from ..models import RoomType

logger = logging.getLogger(__name__)


async def check_availability(
    room_type_repo: RoomTypeRepository,
    res_repo: ReservationRepository,
    *,
    room_type_id: str,
    check_in: datetime,
    check_out: datetime,
    rooms_needed: int = 1,
) -> AvailabilityResult:
    validate_stay(check_in, check_out, rooms_needed=rooms_needed)
    room_type = await room_type_repo.get_active(room_type_id)
    if room_type is None:
        logger.debug("room type %s missing or inactive", room_type_id)
        return AvailabilityResult.unavailable()

    counts = await res_repo.list_blocking_room_counts(room_type_id, check_in, check_out)
    return compute_availability(room_type.total_rooms, counts, rooms_needed=rooms_needed)


async def list_available_room_types(
    room_type_repo: RoomTypeRepository,
    res_repo: ReservationRepository,
    *,
    customer_id: str,
    check_in: datetime,
    check_out: datetime,
    guests_needed: int = 1,
) -> List[Tuple[RoomType, AvailabilityResult]]:
    validate_stay(check_in, check_out)
    room_types = list(await room_type_repo.list_active_for_customer(customer_id, min_guests=guests_needed))
    results = await asyncio.gather(
        *(
            check_availability(
                room_type_repo,
                res_repo,
                room_type_id=room_type.id,
                check_in=check_in,
                check_out=check_out,
                rooms_needed=1,
            )
            for room_type in room_types
        )
    )
    available = [(rt, result) for rt, result in zip(room_types, results) if result.available]
    logger.debug(
        "customer %s: %d of %d room types free", customer_id, len(available), len(room_types)
    )
    return available


async def suggest_alternative_dates(
    room_type_repo: RoomTypeRepository,
    res_repo: ReservationRepository,
    *,
    room_type_id: str,
    preferred_check_in: datetime,
    preferred_check_out: datetime,
    rooms_needed: int = 1,
    days_to_search: int = 14,
    limit: int = 5,
) -> List[AlternativeDates]:
    validate_stay(preferred_check_in, preferred_check_out, rooms_needed=rooms_needed)
    candidates: List[AlternativeDates] = []
    for check_in, check_out in shifted_windows(
        preferred_check_in, preferred_check_out, days_to_search=days_to_search
    ):
        result = await check_availability(
            room_type_repo,
            res_repo,
            room_type_id=room_type_id,
            check_in=check_in,
            check_out=check_out,
            rooms_needed=rooms_needed,
        )
        if result.available:
            candidates.append(
                AlternativeDates(check_in=check_in, check_out=check_out, available_rooms=result.available_rooms)
            )
    return rank_alternatives(candidates, preferred_check_in=preferred_check_in, limit=limit)
