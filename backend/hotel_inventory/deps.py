from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .config import Settings, get_settings
from .database import get_sessionmaker
from .infrastructure.repositories import SqlAlchemyReservationRepository, SqlAlchemyRoomTypeRepository


async def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return get_sessionmaker()


async def get_app_settings() -> Settings:
    return get_settings()


async def get_customer_id(x_customer_id: str | None = Header(default=None)) -> str:
    if x_customer_id is None or not x_customer_id.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="X-Customer-Id header required")
    return x_customer_id.strip()


async def get_room_type_repo(
    sessionmaker: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlAlchemyRoomTypeRepository:
    return SqlAlchemyRoomTypeRepository(sessionmaker)


async def get_reservation_repo(
    sessionmaker: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlAlchemyReservationRepository:
    return SqlAlchemyReservationRepository(sessionmaker)
