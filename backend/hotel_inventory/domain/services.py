import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator

from ..models import ReservationStatus
from .errors import InvalidStayError

BLOCKING_STATUSES: frozenset[ReservationStatus] = frozenset(
    {ReservationStatus.PENDING, ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN}
)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    available_rooms: int
    total_rooms: int
    booked_rooms: int

    @classmethod
    def unavailable(cls) -> "AvailabilityResult":
        return cls(available=False, available_rooms=0, total_rooms=0, booked_rooms=0)


@dataclass(frozen=True)
class AlternativeDates:
    check_in: datetime
    check_out: datetime
    available_rooms: int


def validate_stay(check_in: datetime, check_out: datetime, *, rooms_needed: int = 1) -> None:
    if check_in >= check_out:
        raise InvalidStayError("check_in must be earlier than check_out")
    if rooms_needed < 1:
        raise InvalidStayError("rooms_needed must be >= 1")


# stays_overlap and blocks_inventory are the blocking rule that
# SqlAlchemyReservationRepository expresses as SQL.
def stays_overlap(
    check_in: datetime,
    check_out: datetime,
    other_check_in: datetime,
    other_check_out: datetime,
) -> bool:
    """Half-open overlap: a stay ending on the day another starts does not overlap it."""
    return other_check_in < check_out and other_check_out > check_in


def blocks_inventory(
    status: ReservationStatus,
    reserved_check_in: datetime,
    reserved_check_out: datetime,
    *,
    check_in: datetime,
    check_out: datetime,
) -> bool:
    if status not in BLOCKING_STATUSES:
        return False
    return stays_overlap(check_in, check_out, reserved_check_in, reserved_check_out)


def compute_availability(
    total_rooms: int,
    booked_room_counts: Iterable[int],
    *,
    rooms_needed: int = 1,
) -> AvailabilityResult:
    """
    Booked rooms are summed once over the whole window, so a reservation that
    only touches part of it still counts in full.
    """
    booked = sum(int(count) for count in booked_room_counts)
    free = total_rooms - booked
    return AvailabilityResult(
        available=free >= rooms_needed,
        available_rooms=max(free, 0),
        total_rooms=total_rooms,
        booked_rooms=booked,
    )


def stay_duration_days(check_in: datetime, check_out: datetime) -> int:
    """Whole nights in the stay; a partial day rounds up."""
    return math.ceil((check_out - check_in) / ONE_DAY)


def shifted_windows(
    check_in: datetime,
    check_out: datetime,
    *,
    days_to_search: int,
) -> Iterator[tuple[datetime, datetime]]:
    """Yield same-length windows shifted by -days..+days, skipping the requested one."""
    stay = timedelta(days=stay_duration_days(check_in, check_out))
    for offset in range(-days_to_search, days_to_search + 1):
        if offset == 0:
            continue
        new_check_in = check_in + timedelta(days=offset)
        yield new_check_in, new_check_in + stay


def rank_alternatives(
    candidates: Iterable[AlternativeDates],
    *,
    preferred_check_in: datetime,
    limit: int = 5,
) -> list[AlternativeDates]:
    ranked = sorted(candidates, key=lambda alt: abs(alt.check_in - preferred_check_in))
    return ranked[:limit]
