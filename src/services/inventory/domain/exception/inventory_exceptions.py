from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


class RoomNotFoundException(ResourceNotFoundException):
    """客室が存在しない場合"""

    code = "ROOM_NOT_FOUND"

    def __init__(self, room_id: object) -> None:
        super().__init__(f"Room not found: {room_id}")
        self.room_id = room_id


class RoomInUseException(BusinessRuleViolationException):
    """未完了の予約が参照している客室を削除しようとした場合"""

    code = "ROOM_IN_USE"

    def __init__(self, room_id: object, booking_count: int) -> None:
        super().__init__(
            f"Room {room_id} is referenced by {booking_count} active booking(s)"
        )
        self.room_id = room_id
        self.booking_count = booking_count
