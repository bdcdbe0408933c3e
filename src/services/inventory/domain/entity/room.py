from services.inventory.domain.value_object import RoomId
from services.shared.domain import Entity, Money


class Room(Entity[RoomId]):
    """客室エンティティ（在庫の参照専用ビュー）

    total_units は同一タイプの客室の総数。予約処理からは読み取りのみ。
    """

    def __init__(
        self,
        id: RoomId,
        room_type: str,
        price: Money,
        total_units: int,
    ) -> None:
        if total_units < 0:
            raise ValueError("Total units cannot be negative")
        super().__init__(id)
        self._room_type = room_type
        self._price = price
        self._total_units = total_units

    @property
    def room_type(self) -> str:
        return self._room_type

    @property
    def price(self) -> Money:
        """現在の1泊あたり料金"""
        return self._price

    @property
    def total_units(self) -> int:
        return self._total_units
