from services.shared.domain.exception import DomainException


class CaptureFailedException(DomainException):
    """決済の確定（キャプチャ）に失敗した場合

    予約は PENDING のまま残り、利用者は再度支払いを試みられる
    """

    code = "CAPTURE_FAILED"

    def __init__(
        self, booking_id: object, order_id: str, reason: str | None = None
    ) -> None:
        message = f"Payment capture failed for booking {booking_id} (order {order_id})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.booking_id = booking_id
        self.order_id = order_id


class ConfirmedPaymentUnrecordedException(DomainException):
    """決済は確定したが予約ステータスを記録できなかった場合

    入金と予約状態が食い違っているため手動での突き合わせが必要
    """

    code = "CONFIRMED_PAYMENT_UNRECORDED"

    def __init__(self, booking_id: object, order_id: str, reason: str) -> None:
        super().__init__(
            f"Payment for booking {booking_id} was captured (order {order_id}) "
            f"but the booking could not be confirmed: {reason}"
        )
        self.booking_id = booking_id
        self.order_id = order_id
        self.reason = reason


class PaymentGatewayException(DomainException):
    """外部決済サービスとの通信に失敗した場合"""

    code = "PAYMENT_GATEWAY_ERROR"
