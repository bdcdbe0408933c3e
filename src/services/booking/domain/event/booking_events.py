from dataclasses import dataclass

from services.shared.domain.event import DomainEvent


@dataclass(frozen=True, kw_only=True)
class BookingCreated(DomainEvent):
    booking_id: str
    user_id: str
    check_in: str
    check_out: str
    total_amount: str
    currency: str
    line_count: int


@dataclass(frozen=True, kw_only=True)
class BookingConfirmed(DomainEvent):
    booking_id: str


@dataclass(frozen=True, kw_only=True)
class BookingCancelled(DomainEvent):
    booking_id: str
    previous_status: str


@dataclass(frozen=True, kw_only=True)
class BookingCompleted(DomainEvent):
    booking_id: str


@dataclass(frozen=True, kw_only=True)
class BookingDeleted(DomainEvent):
    booking_id: str
