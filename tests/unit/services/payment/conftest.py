import pytest

from services.payment.domain.exception import PaymentGatewayException
from services.payment.domain.gateway import PaymentGateway
from services.payment.domain.value_object import PaymentOrder


class FakePaymentGateway(PaymentGateway):
    """呼び出しを記録するテスト用ゲートウェイ"""

    def __init__(self, captured: bool = True, error: str | None = None) -> None:
        self.captured = captured
        self.error = error
        self.created: list[tuple] = []
        self.captures: list[str] = []

    def create_order(self, amount, booking_id) -> PaymentOrder:
        self.created.append((amount, booking_id))
        return PaymentOrder(
            order_id="ORDER-1",
            approval_url="https://www.sandbox.paypal.com/checkoutnow?token=ORDER-1",
        )

    def capture_order(self, order_id: str) -> bool:
        self.captures.append(order_id)
        if self.error:
            raise PaymentGatewayException(self.error)
        return self.captured


@pytest.fixture
def create_gateway():
    """FakePaymentGateway を生成する Factory fixture"""

    def _factory(captured: bool = True, error: str | None = None) -> FakePaymentGateway:
        return FakePaymentGateway(captured=captured, error=error)

    return _factory
