from abc import ABC, abstractmethod

from services.booking.domain.value_object import BookingId
from services.payment.domain.value_object import PaymentOrder
from services.shared.domain import Money


class PaymentGateway(ABC):
    """外部決済サービスのポート

    アダプターは通信のみを担い、予約の状態遷移は扱わない。
    通信失敗はすべて PaymentGatewayException として送出する。
    """

    @abstractmethod
    def create_order(self, amount: Money, booking_id: BookingId) -> PaymentOrder:
        """金額を指定して決済注文を作成する"""
        raise NotImplementedError

    @abstractmethod
    def capture_order(self, order_id: str) -> bool:
        """承認済みの注文を確定し、入金が完了したかを返す"""
        raise NotImplementedError
