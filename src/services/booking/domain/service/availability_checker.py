from datetime import date

from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import StayPeriod
from services.inventory.domain.entity import Room
from services.inventory.domain.repository import RoomRepository
from services.inventory.domain.value_object import RoomId


class AvailabilityChecker:
    """客室の空き判定を行うドメインサービス

    仮押さえは持たず、判定は常にその時点の予約から集計する。
    キャンセル以外（COMPLETED を含む）の予約はすべて在庫を消費しているとみなす。
    """

    def __init__(
        self,
        room_repository: RoomRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self._room_repository = room_repository
        self._booking_repository = booking_repository

    def is_available(
        self,
        room_id: RoomId,
        check_in: date,
        check_out: date,
        quantity: int,
    ) -> bool:
        """指定期間に quantity 室以上の空きがあるか"""
        if check_in >= check_out or quantity <= 0:
            return False
        room = self._room_repository.find_by_id(room_id)
        if room is None:
            return False
        return self.has_capacity(room, StayPeriod(check_in, check_out), quantity)

    def has_capacity(self, room: Room, stay_period: StayPeriod, quantity: int) -> bool:
        """取得済みの客室について空きがあるか"""
        if quantity <= 0 or room.total_units < quantity:
            return False
        return self.available_units(room, stay_period) >= quantity

    def available_units(self, room: Room, stay_period: StayPeriod) -> int:
        """指定期間の残室数"""
        reserved = self._booking_repository.list_overlapping(room.id, stay_period)
        booked = sum(
            line.quantity
            for line in reserved
            if line.status.occupies_capacity and line.stay_period.overlaps(stay_period)
        )
        return max(room.total_units - booked, 0)
