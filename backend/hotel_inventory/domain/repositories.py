from __future__ import annotations

from datetime import datetime
from typing import Iterable, Protocol

from ..models import RoomType


class RoomTypeRepository(Protocol):
    async def get_active(self, room_type_id: str) -> RoomType | None: ...

    async def list_active_for_customer(
        self,
        customer_id: str,
        *,
        min_guests: int,
    ) -> Iterable[RoomType]: ...


class ReservationRepository(Protocol):
    async def list_blocking_room_counts(
        self,
        room_type_id: str,
        check_in: datetime,
        check_out: datetime,
    ) -> Iterable[int]:
        """Rooms held by each blocking reservation overlapping [check_in, check_out)."""
        ...
