from dataclasses import dataclass

from services.inventory.domain.value_object import RoomId
from services.shared.domain import Money


@dataclass(frozen=True)
class BookingLine:
    """予約明細

    price_per_night は予約時点の料金スナップショットで、以後の料金改定の影響を受けない
    """

    room_id: RoomId
    quantity: int
    price_per_night: Money

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Quantity must be at least 1")

    def total_price(self, nights: int) -> Money:
        """明細の合計金額（1泊料金 × 数量 × 泊数）"""
        return self.price_per_night.multiply(self.quantity * nights)
