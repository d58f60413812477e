from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .domain.rates import StayRateSummary
from .domain.services import AlternativeDates, AvailabilityResult
from .models import RoomType
from .utils.time import utc_naive_to_aware


class AvailabilityRead(BaseModel):
    room_type_id: str
    available: bool
    available_rooms: int
    total_rooms: int
    booked_rooms: int

    @classmethod
    def from_result(cls, *, room_type_id: str, result: AvailabilityResult) -> "AvailabilityRead":
        return cls(
            room_type_id=room_type_id,
            available=result.available,
            available_rooms=result.available_rooms,
            total_rooms=result.total_rooms,
            booked_rooms=result.booked_rooms,
        )


class AvailableRoomTypeRead(AvailabilityRead):
    name: str
    description: Optional[str]
    max_guests: int
    price_per_night: float

    @classmethod
    def from_db(cls, *, room_type: RoomType, result: AvailabilityResult) -> "AvailableRoomTypeRead":
        return cls(
            room_type_id=room_type.id,
            name=room_type.name,
            description=room_type.description,
            max_guests=room_type.max_guests,
            price_per_night=room_type.price_per_night,
            available=result.available,
            available_rooms=result.available_rooms,
            total_rooms=result.total_rooms,
            booked_rooms=result.booked_rooms,
        )


class AlternativeDatesRead(BaseModel):
    check_in: datetime
    check_out: datetime
    available_rooms: int

    @field_serializer("check_in", "check_out")
    def _ser_datetime(self, dt: datetime) -> str:
        return dt.isoformat()

    @classmethod
    def from_domain(cls, alternative: AlternativeDates) -> "AlternativeDatesRead":
        return cls(
            check_in=utc_naive_to_aware(alternative.check_in),
            check_out=utc_naive_to_aware(alternative.check_out),
            available_rooms=alternative.available_rooms,
        )


class RoomTypeRefIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Union[str, int]
    name: str = ""


class HotelPricingDocument(BaseModel):
    """Hotel knowledge-base document; only ``pricing`` and ``roomTypes`` are read."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    pricing: Dict[str, Any] = Field(default_factory=dict)
    room_types: List[RoomTypeRefIn] = Field(default_factory=list, alias="roomTypes")

    def as_hotel_data(self) -> Dict[str, Any]:
        return {
            "pricing": self.pricing,
            "roomTypes": [rt.model_dump() for rt in self.room_types],
        }


class PricingInfoRead(BaseModel):
    date: Optional[str] = None
    room_type: Optional[str] = None
    daily_rates: List[Dict[str, Any]]
    rules: Dict[str, Any]
    discounts: List[Any]


class StayRateSummaryRead(BaseModel):
    has_available_rooms: bool
    lowest_price: Optional[float]

    @classmethod
    def from_domain(cls, summary: StayRateSummary) -> "StayRateSummaryRead":
        return cls(has_available_rooms=summary.has_available_rooms, lowest_price=summary.lowest_price)


class StayQuoteRead(BaseModel):
    check_in: date
    check_out: date
    room_type: Optional[str] = None
    daily_rates: List[Dict[str, Any]]
    summary: StayRateSummaryRead
