from services.booking.applications.booking_access import load_authorized_booking
from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain import Requester


class CancelBookingService:
    """予約キャンセルのユースケース（所有者または管理者）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def cancel(self, booking_id: BookingId, requester: Requester) -> Booking:
        """予約をキャンセルして在庫を解放する"""
        booking = load_authorized_booking(self._repository, booking_id, requester)
        expected_status = booking.status
        if booking.cancel():
            self._repository.update(booking, expected_status=expected_status)
        return booking
