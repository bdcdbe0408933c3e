from services.booking.applications.booking_access import load_authorized_booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.exception import InvalidStatusTransitionException
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.payment.applications.payment_completion import (
    CaptureResult,
    PaymentCompletionHandler,
)
from services.payment.domain.enum import CaptureOutcome
from services.payment.domain.exception import PaymentGatewayException
from services.payment.domain.gateway import PaymentGateway
from services.shared.domain import Requester


class CapturePaymentService:
    """決済確定のユースケース

    外部決済サービスへの確定要求は1回のみ行い、再試行しない。
    通信失敗やタイムアウトは未入金（captured=False）として扱う。
    """

    def __init__(
        self,
        repository: BookingRepository,
        gateway: PaymentGateway,
        completion_handler: PaymentCompletionHandler,
    ) -> None:
        self._repository = repository
        self._gateway = gateway
        self._completion_handler = completion_handler

    def capture(
        self, booking_id: BookingId, order_id: str, requester: Requester
    ) -> CaptureResult:
        booking = load_authorized_booking(self._repository, booking_id, requester)
        if booking.status == BookingStatus.CONFIRMED:
            return CaptureResult(CaptureOutcome.ALREADY_CONFIRMED, booking)
        if booking.status != BookingStatus.PENDING:
            raise InvalidStatusTransitionException(booking.status, "capture payment for")

        reason: str | None = None
        try:
            captured = self._gateway.capture_order(order_id)
        except PaymentGatewayException as e:
            captured = False
            reason = str(e)
        if not captured and reason is None:
            reason = "order was not completed"

        return self._completion_handler.on_capture_result(
            booking_id, order_id, captured, reason
        )
