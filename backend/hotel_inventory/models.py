from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Enum, ForeignKey, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql.sqltypes import DateTime, Float, Integer, String, Text


class Base(DeclarativeBase):
    pass


class ReservationStatus(StrEnum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class PriceAdjustmentType(StrEnum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"
    FIXED_PRICE = "FIXED_PRICE"


def _enum_column(enum_cls: type[StrEnum]) -> Enum:
    return Enum(
        enum_cls,
        values_callable=lambda members: [e.value for e in members],
        native_enum=False,
    )


class RoomType(Base):
    __tablename__ = "room_types"
    __table_args__ = (
        CheckConstraint("total_rooms >= 0", name="chk_room_types_total"),
        CheckConstraint("max_guests >= 1", name="chk_room_types_guests"),
        Index("idx_room_types_customer", "customer_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(36), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    max_guests: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    price_per_night: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    reservations: Mapped[list["Reservation"]] = relationship(back_populates="room_type")
    price_rules: Mapped[list["RoomPriceRule"]] = relationship(back_populates="room_type")


class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("check_in < check_out", name="chk_res_stay"),
        CheckConstraint("number_of_rooms >= 1", name="chk_res_rooms"),
        Index("idx_res_room_type_stay", "room_type_id", "check_in", "check_out"),
        Index("idx_res_customer", "customer_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    room_type_id: Mapped[str] = mapped_column(ForeignKey("room_types.id"), nullable=False)
    customer_id: Mapped[str] = mapped_column(String(36), nullable=False)
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    check_in: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    check_out: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    number_of_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    number_of_guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    status: Mapped[ReservationStatus] = mapped_column(
        _enum_column(ReservationStatus),
        nullable=False,
        default=ReservationStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    room_type: Mapped["RoomType"] = relationship(back_populates="reservations")


class RoomPriceRule(Base):
    """Price adjustment attached to a room type.

    Stored for the dashboard's calendar view; availability and rate
    resolution never evaluate these rules.
    """

    __tablename__ = "room_price_rules"
    __table_args__ = (Index("idx_price_rules_room_type", "room_type_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    room_type_id: Mapped[str] = mapped_column(ForeignKey("room_types.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price_adjustment_type: Mapped[PriceAdjustmentType] = mapped_column(
        _enum_column(PriceAdjustmentType),
        nullable=False,
    )
    adjustment_value: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=False), nullable=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=False), nullable=True)
    # comma separated weekday numbers, 0=Sunday
    days_of_week: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    room_type: Mapped["RoomType"] = relationship(back_populates="price_rules")
