from services.booking.domain.enum import BookingStatus
from services.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
)


class EmptyCartException(BusinessRuleViolationException):
    """カートが空の状態でチェックアウトしようとした場合"""

    code = "EMPTY_CART"

    def __init__(self, message: str = "Cart is empty") -> None:
        super().__init__(message)


class InconsistentDatesException(BusinessRuleViolationException):
    """カート明細間でチェックイン日・チェックアウト日が一致しない場合"""

    code = "INCONSISTENT_DATES"

    def __init__(
        self,
        message: str = "All items must have the same check-in and check-out dates",
    ) -> None:
        super().__init__(message)


class InvalidDateRangeException(BusinessRuleViolationException):
    """チェックアウト日がチェックイン日以前の場合"""

    code = "INVALID_DATE_RANGE"

    def __init__(
        self, message: str = "Check-out date must be after check-in date"
    ) -> None:
        super().__init__(message)


class MixedCurrencyException(BusinessRuleViolationException):
    """料金の通貨が異なる客室を1つの予約にまとめようとした場合"""

    code = "MIXED_CURRENCY"

    def __init__(self, currencies: list[str]) -> None:
        super().__init__(
            f"All rooms in a booking must be priced in one currency: {', '.join(currencies)}"
        )
        self.currencies = currencies


class RoomUnavailableException(BusinessRuleViolationException):
    """指定期間・数量で客室の空きが無い場合"""

    code = "ROOM_UNAVAILABLE"

    def __init__(self, room_id: object, quantity: int) -> None:
        super().__init__(
            f"Room {room_id} is not available for the selected dates "
            f"with quantity {quantity}"
        )
        self.room_id = room_id
        self.quantity = quantity


class BookingNotFoundException(ResourceNotFoundException):
    """予約が存在しない場合"""

    code = "BOOKING_NOT_FOUND"

    def __init__(self, booking_id: object) -> None:
        super().__init__(f"Booking not found: {booking_id}")
        self.booking_id = booking_id


class InvalidStatusTransitionException(BusinessRuleViolationException):
    """現在のステータスでは許可されない操作の場合"""

    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: BookingStatus, action: str) -> None:
        super().__init__(f"Cannot {action} a booking in {current.value} status")
        self.current = current
        self.action = action
