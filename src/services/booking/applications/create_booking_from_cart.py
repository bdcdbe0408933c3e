from services.booking.domain.entity import Booking
from services.booking.domain.exception import (
    EmptyCartException,
    InconsistentDatesException,
    InvalidDateRangeException,
    MixedCurrencyException,
    RoomUnavailableException,
)
from services.booking.domain.factory import BookingFactory, LineDetails
from services.booking.domain.repository import BookingRepository
from services.booking.domain.service import AvailabilityChecker
from services.booking.domain.value_object import StayPeriod
from services.cart.domain.value_object import CartSnapshot
from services.inventory.domain.entity import Room
from services.inventory.domain.repository import RoomRepository
from services.inventory.domain.value_object import RoomId
from services.shared.domain import UserId


class CreateBookingFromCartService:
    """カートのスナップショットから予約を作成するユースケース

    検証（構造 -> 全明細の空き -> 通貨の一致）がすべて通ってから保存する。
    途中で失敗した場合は何も書き込まない。
    空き判定と保存の間でロックは取らないため、同一客室への同時チェックアウトは
    先に保存した側が勝ち、稀に超過予約が発生しうる。
    """

    def __init__(
        self,
        repository: BookingRepository,
        room_repository: RoomRepository,
        availability_checker: AvailabilityChecker,
        factory: BookingFactory,
    ) -> None:
        self._repository = repository
        self._room_repository = room_repository
        self._availability_checker = availability_checker
        self._factory = factory

    def create(self, user_id: UserId, cart: CartSnapshot) -> Booking:
        """カートから PENDING の予約を作成する"""
        stay_period = self._validate_structure(cart)

        rooms: dict[RoomId, Room] = {}
        for room_id, quantity in self._requested_quantities(cart).items():
            room = self._room_repository.find_by_id(room_id)
            if room is None or not self._availability_checker.has_capacity(
                room, stay_period, quantity
            ):
                raise RoomUnavailableException(room_id, quantity)
            rooms[room_id] = room

        currencies = sorted({str(room.price.currency) for room in rooms.values()})
        if len(currencies) > 1:
            raise MixedCurrencyException(currencies)

        line_details: list[LineDetails] = [
            {"room": rooms[line.room_id], "quantity": line.quantity}
            for line in cart.lines
        ]
        booking = self._factory.create(user_id, stay_period, line_details)
        self._repository.save(booking)
        return booking

    def _validate_structure(self, cart: CartSnapshot) -> StayPeriod:
        if cart.is_empty:
            raise EmptyCartException()
        if not cart.has_consistent_dates():
            raise InconsistentDatesException()
        check_in, check_out = cart.lines[0].dates
        if check_in >= check_out:
            raise InvalidDateRangeException()
        return StayPeriod(check_in=check_in, check_out=check_out)

    def _requested_quantities(self, cart: CartSnapshot) -> dict[RoomId, int]:
        """同じ客室の明細は合算して判定する（明細の出現順を保つ）"""
        quantities: dict[RoomId, int] = {}
        for line in cart.lines:
            quantities[line.room_id] = quantities.get(line.room_id, 0) + line.quantity
        return quantities
