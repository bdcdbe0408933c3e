from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.inventory.domain.exception import (
    RoomInUseException,
    RoomNotFoundException,
)
from services.inventory.domain.repository import RoomRepository
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Requester, UnauthorizedException

# 削除をブロックする予約ステータス
_BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})


class RemoveRoomService:
    """客室削除のユースケース（管理者のみ）"""

    def __init__(
        self, room_repository: RoomRepository, booking_repository: BookingRepository
    ) -> None:
        self._room_repository = room_repository
        self._booking_repository = booking_repository

    def remove(self, room_id: RoomId, requester: Requester) -> None:
        """未完了の予約が無い客室を削除する"""
        if not requester.is_admin:
            raise UnauthorizedException(
                f"User {requester.user_id} is not an administrator"
            )
        if self._room_repository.find_by_id(room_id) is None:
            raise RoomNotFoundException(room_id)

        blocking = [
            booking
            for booking in self._booking_repository.find_by_room_id(room_id)
            if booking.status in _BLOCKING_STATUSES
        ]
        if blocking:
            raise RoomInUseException(room_id, len(blocking))

        self._room_repository.delete(room_id)
