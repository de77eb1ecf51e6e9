"""Domain models for cabins, guests and bookings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


STATUS_UNCONFIRMED = "unconfirmed"
STATUS_CHECKED_IN = "checked-in"
STATUS_CHECKED_OUT = "checked-out"

BOOKING_STATUSES = (STATUS_UNCONFIRMED, STATUS_CHECKED_IN, STATUS_CHECKED_OUT)


@dataclass(frozen=True)
class CabinSeed:
    ordinal: int
    name: str
    max_capacity: int
    regular_price: float
    discount: float
    description: str = ""
    image: str = ""

    @property
    def nightly_rate(self) -> float:
        return self.regular_price - self.discount

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "max_capacity": self.max_capacity,
            "regular_price": self.regular_price,
            "discount": self.discount,
            "description": self.description,
            "image": self.image,
        }


@dataclass(frozen=True)
class GuestSeed:
    ordinal: int
    full_name: str
    email: str
    nationality: str = ""
    national_id: str = ""
    country_flag: str = ""

    def to_record(self) -> dict[str, Any]:
        return {
            "full_name": self.full_name,
            "email": self.email,
            "nationality": self.nationality,
            "national_id": self.national_id,
            "country_flag": self.country_flag,
        }


@dataclass(frozen=True)
class BookingSeed:
    """Raw booking as authored in seed data.

    ``guest_ordinal`` and ``cabin_ordinal`` are 1-based positions in the guest
    and cabin seed lists. When ``start_date``/``end_date`` are given they win
    over the day offsets.
    """

    ordinal: int
    guest_ordinal: int
    cabin_ordinal: int
    created_offset: int
    start_offset: int
    end_offset: int
    num_guests: int
    has_breakfast: bool
    is_paid: bool
    observations: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class StayPricing:
    num_nights: int
    cabin_price: float
    extras_price: float
    total_price: float


@dataclass(frozen=True)
class ResolvedBooking:
    guest_id: int
    cabin_id: int
    created_at: datetime
    start_date: datetime
    end_date: datetime
    num_nights: int
    num_guests: int
    cabin_price: float
    extras_price: float
    total_price: float
    status: str
    has_breakfast: bool
    is_paid: bool
    observations: str

    def to_record(self) -> dict[str, Any]:
        return {
            "created_at": self.created_at.isoformat(),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "num_nights": self.num_nights,
            "num_guests": self.num_guests,
            "cabin_price": self.cabin_price,
            "extras_price": self.extras_price,
            "total_price": self.total_price,
            "status": self.status,
            "has_breakfast": self.has_breakfast,
            "is_paid": self.is_paid,
            "observations": self.observations,
            "cabin_id": self.cabin_id,
            "guest_id": self.guest_id,
        }
