from services.booking.domain.entity import Booking
from services.booking.domain.exception import BookingNotFoundException
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain import Requester, UnauthorizedException


def load_authorized_booking(
    repository: BookingRepository, booking_id: BookingId, requester: Requester
) -> Booking:
    """予約を取得し、所有者または管理者であることを確認する"""
    booking = repository.find_by_id(booking_id)
    if booking is None:
        raise BookingNotFoundException(booking_id)
    if not requester.can_act_on(booking.user_id):
        raise UnauthorizedException(
            f"User {requester.user_id} cannot access booking {booking_id}"
        )
    return booking


def require_admin(requester: Requester) -> None:
    """管理者以外を拒否する"""
    if not requester.is_admin:
        raise UnauthorizedException(
            f"User {requester.user_id} is not an administrator"
        )
