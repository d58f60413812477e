from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..domain.repositories import ReservationRepository, RoomTypeRepository
from ..domain.services import BLOCKING_STATUSES
from ..models import Reservation, RoomType

# Repositories open a short-lived session per read. An AsyncSession cannot
# serve concurrent awaits, and availability checks are gathered in parallel.


class SqlAlchemyRoomTypeRepository(RoomTypeRepository):
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    async def get_active(self, room_type_id: str) -> RoomType | None:
        stmt = select(RoomType).where(RoomType.id == room_type_id, RoomType.is_active.is_(True))
        async with self.sessionmaker() as session:
            result = await session.scalar(stmt)
        return result if isinstance(result, RoomType) else None

    async def list_active_for_customer(self, customer_id: str, *, min_guests: int) -> List[RoomType]:
        stmt = select(RoomType).where(
            RoomType.customer_id == customer_id,
            RoomType.is_active.is_(True),
            RoomType.max_guests >= min_guests,
        )
        async with self.sessionmaker() as session:
            return list((await session.scalars(stmt)).all())


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    async def list_blocking_room_counts(
        self,
        room_type_id: str,
        check_in: datetime,
        check_out: datetime,
    ) -> List[int]:
        stmt = select(Reservation.number_of_rooms).where(
            Reservation.room_type_id == room_type_id,
            Reservation.status.in_(BLOCKING_STATUSES),
            Reservation.check_in < check_out,
            Reservation.check_out > check_in,
        )
        async with self.sessionmaker() as session:
            rows = (await session.scalars(stmt)).all()
        return [int(rooms) for rooms in rows]
