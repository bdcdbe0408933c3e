from dataclasses import dataclass
from datetime import date

from services.inventory.domain.value_object import RoomId


@dataclass(frozen=True)
class CartLine:
    """カート明細（客室・数量・宿泊日）

    日付の整合性はカート作成時ではなくチェックアウト時に検証する
    """

    room_id: RoomId
    quantity: int
    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Quantity must be at least 1")

    @property
    def dates(self) -> tuple[date, date]:
        return (self.check_in, self.check_out)
