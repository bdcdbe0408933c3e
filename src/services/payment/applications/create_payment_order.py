from services.booking.applications.booking_access import load_authorized_booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.exception import InvalidStatusTransitionException
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.payment.domain.gateway import PaymentGateway
from services.payment.domain.value_object import PaymentOrder
from services.shared.domain import Requester


class CreatePaymentOrderService:
    """予約の支払い注文を作成するユースケース"""

    def __init__(self, repository: BookingRepository, gateway: PaymentGateway) -> None:
        self._repository = repository
        self._gateway = gateway

    def create_order(self, booking_id: BookingId, requester: Requester) -> PaymentOrder:
        """PENDING の予約について合計金額の支払い注文を作成する"""
        booking = load_authorized_booking(self._repository, booking_id, requester)
        if booking.status != BookingStatus.PENDING:
            raise InvalidStatusTransitionException(booking.status, "pay for")
        return self._gateway.create_order(booking.total_price.rounded(), booking.id)
