from dataclasses import dataclass

from services.booking.applications.create_booking_from_cart import (
    CreateBookingFromCartService,
)
from services.booking.domain.entity import Booking
from services.cart.domain.repository import CartRepository
from services.shared.domain import Requester
from services.shared.domain.exception import StorageFailureException


@dataclass(frozen=True)
class CheckoutResult:
    """チェックアウト結果

    cart_cleared が False の場合、予約は作成済みだがカートが残っている
    """

    booking: Booking
    cart_cleared: bool
    cart_clear_error: StorageFailureException | None = None


class CheckoutCartService:
    """カートのチェックアウトユースケース

    予約作成に成功した場合のみカートをクリアする。
    予約作成とカートのクリアは同一トランザクションではない。
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        create_booking_service: CreateBookingFromCartService,
    ) -> None:
        self._cart_repository = cart_repository
        self._create_booking_service = create_booking_service

    def checkout(self, requester: Requester) -> CheckoutResult:
        """カートの内容で予約を作成し、カートを空にする"""
        snapshot = self._cart_repository.get_snapshot(requester.user_id)
        booking = self._create_booking_service.create(requester.user_id, snapshot)
        try:
            self._cart_repository.clear(requester.user_id)
        except StorageFailureException as e:
            return CheckoutResult(booking=booking, cart_cleared=False, cart_clear_error=e)
        return CheckoutResult(booking=booking, cart_cleared=True)
