from services.booking.applications.booking_access import load_authorized_booking
from services.booking.domain.entity import Booking
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain import Requester


class DeleteBookingService:
    """未決済予約の削除ユースケース"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def delete(self, booking_id: BookingId, requester: Requester) -> Booking:
        """PENDING の予約を明細ごと削除する"""
        booking = load_authorized_booking(self._repository, booking_id, requester)
        booking.mark_deleted()
        self._repository.delete(booking.id)
        return booking
