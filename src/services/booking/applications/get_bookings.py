from datetime import date
from enum import Enum

from services.booking.applications.booking_access import (
    load_authorized_booking,
    require_admin,
)
from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Requester, UnauthorizedException, UserId


class BookingCategory(str, Enum):
    """マイページの予約一覧の区分"""

    ALL = "ALL"
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    PAST = "PAST"
    CANCELLED = "CANCELLED"


def _matches(booking: Booking, category: BookingCategory, today: date) -> bool:
    status = booking.status
    check_out = booking.stay_period.check_out
    if category is BookingCategory.ACTIVE:
        return status == BookingStatus.CONFIRMED and check_out >= today
    if category is BookingCategory.PENDING:
        return status == BookingStatus.PENDING
    if category is BookingCategory.PAST:
        return (
            status == BookingStatus.CONFIRMED and check_out < today
        ) or status == BookingStatus.COMPLETED
    if category is BookingCategory.CANCELLED:
        return status == BookingStatus.CANCELLED
    return True


class BookingQueryService:
    """予約参照のユースケース"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def get_booking(self, booking_id: BookingId, requester: Requester) -> Booking:
        return load_authorized_booking(self._repository, booking_id, requester)

    def list_user_bookings(
        self,
        user_id: UserId,
        requester: Requester,
        category: BookingCategory = BookingCategory.ALL,
        today: date | None = None,
    ) -> list[Booking]:
        """利用者の予約を区分で絞り込んで返す"""
        if not requester.can_act_on(user_id):
            raise UnauthorizedException(
                f"User {requester.user_id} cannot list bookings of {user_id}"
            )
        today = today or date.today()
        return [
            booking
            for booking in self._repository.find_by_user_id(user_id)
            if _matches(booking, category, today)
        ]

    def list_all_bookings(self, requester: Requester) -> list[Booking]:
        require_admin(requester)
        return self._repository.find_all()

    def list_bookings_for_room(
        self, room_id: RoomId, requester: Requester
    ) -> list[Booking]:
        require_admin(requester)
        return self._repository.find_by_room_id(room_id)
