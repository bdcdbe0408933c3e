from dataclasses import dataclass

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.exception import InvalidStatusTransitionException
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.payment.domain.enum import CaptureOutcome
from services.payment.domain.exception import (
    CaptureFailedException,
    ConfirmedPaymentUnrecordedException,
)
from services.shared.domain.exception import (
    OptimisticLockException,
    StorageFailureException,
)


@dataclass(frozen=True)
class CaptureResult:
    outcome: CaptureOutcome
    booking: Booking


class PaymentCompletionHandler:
    """決済確定の結果を受けて予約を確定させる

    入金済みにもかかわらず予約を確定できなかった場合は
    CaptureFailedException ではなく ConfirmedPaymentUnrecordedException を送出する。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def on_capture_result(
        self,
        booking_id: BookingId,
        order_id: str,
        captured: bool,
        reason: str | None = None,
    ) -> CaptureResult:
        if not captured:
            raise CaptureFailedException(booking_id, order_id, reason)

        booking = self._load(booking_id, order_id)
        expected_status = booking.status
        try:
            changed = booking.confirm()
        except InvalidStatusTransitionException as e:
            raise ConfirmedPaymentUnrecordedException(booking_id, order_id, str(e)) from e
        if not changed:
            return CaptureResult(CaptureOutcome.ALREADY_CONFIRMED, booking)

        try:
            self._repository.update(booking, expected_status=expected_status)
        except OptimisticLockException as e:
            # 並行する確定処理が先に記録していれば二重通知として扱う
            current = self._load(booking_id, order_id)
            if current.status == BookingStatus.CONFIRMED:
                return CaptureResult(CaptureOutcome.ALREADY_CONFIRMED, current)
            raise ConfirmedPaymentUnrecordedException(booking_id, order_id, str(e)) from e
        except StorageFailureException as e:
            raise ConfirmedPaymentUnrecordedException(booking_id, order_id, str(e)) from e

        return CaptureResult(CaptureOutcome.CONFIRMED, booking)

    def _load(self, booking_id: BookingId, order_id: str) -> Booking:
        try:
            booking = self._repository.find_by_id(booking_id)
        except StorageFailureException as e:
            raise ConfirmedPaymentUnrecordedException(booking_id, order_id, str(e)) from e
        if booking is None:
            raise ConfirmedPaymentUnrecordedException(
                booking_id, order_id, "booking not found"
            )
        return booking
