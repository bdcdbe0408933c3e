import copy
import importlib
import json
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import (
    BookingId,
    BookingLine,
    ReservedLine,
    StayPeriod,
)
from services.cart.domain.value_object import CartLine, CartSnapshot
from services.inventory.domain.entity import Room
from services.inventory.domain.repository import RoomRepository
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Money, Requester, UserId
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


class InMemoryRoomRepository(RoomRepository):
    """テスト用のインメモリ RoomRepository"""

    def __init__(self) -> None:
        self._rooms: dict[RoomId, Room] = {}

    def add(self, room: Room) -> None:
        self._rooms[room.id] = room

    def find_by_id(self, room_id: RoomId) -> Room | None:
        return self._rooms.get(room_id)

    def delete(self, room_id: RoomId) -> None:
        self._rooms.pop(room_id, None)


class InMemoryBookingRepository(BookingRepository):
    """テスト用のインメモリ BookingRepository（保存時・取得時にコピーする）"""

    def __init__(self) -> None:
        self._bookings: dict[BookingId, Booking] = {}

    def save(self, booking: Booking) -> None:
        if booking.id in self._bookings:
            raise DuplicateResourceException(f"Booking already exists: {booking.id}")
        self._bookings[booking.id] = copy.deepcopy(booking)

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        booking = self._bookings.get(booking_id)
        return copy.deepcopy(booking) if booking else None

    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        stored = self._bookings.get(booking.id)
        if stored is None or (
            expected_status is not None and stored.status != expected_status
        ):
            raise OptimisticLockException(f"Booking status conflict: {booking.id}")
        self._bookings[booking.id] = copy.deepcopy(booking)

    def delete(self, booking_id: BookingId) -> None:
        stored = self._bookings.get(booking_id)
        if stored is None or stored.status != BookingStatus.PENDING:
            raise OptimisticLockException(f"Booking is no longer pending: {booking_id}")
        del self._bookings[booking_id]

    def list_overlapping(
        self, room_id: RoomId, stay_period: StayPeriod
    ) -> list[ReservedLine]:
        return [
            ReservedLine(
                booking_id=booking.id,
                room_id=line.room_id,
                quantity=line.quantity,
                stay_period=booking.stay_period,
                status=booking.status,
            )
            for booking in self._bookings.values()
            if booking.status.occupies_capacity
            and booking.stay_period.overlaps(stay_period)
            for line in booking.lines
            if line.room_id == room_id
        ]

    def find_by_user_id(self, user_id: UserId) -> list[Booking]:
        return self._newest_first(b for b in self._bookings.values() if b.user_id == user_id)

    def find_by_room_id(self, room_id: RoomId) -> list[Booking]:
        return self._newest_first(
            b
            for b in self._bookings.values()
            if any(line.room_id == room_id for line in b.lines)
        )

    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        return self._newest_first(b for b in self._bookings.values() if b.status == status)

    def find_all(self) -> list[Booking]:
        return self._newest_first(self._bookings.values())

    @staticmethod
    def _newest_first(bookings) -> list[Booking]:
        return [
            copy.deepcopy(b)
            for b in sorted(bookings, key=lambda b: b.booking_date, reverse=True)
        ]


@dataclass
class FakeLambdaContext:
    function_name: str = "test-function"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = (
        "arn:aws:lambda:ap-northeast-1:123456789012:function:test-function"
    )
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def user_id():
    """全テスト共通の UserId フィクスチャ"""
    return UserId(value="user-123")


@pytest.fixture
def requester(user_id):
    return Requester(user_id=user_id)


@pytest.fixture
def other_requester():
    return Requester(user_id=UserId(value="user-999"))


@pytest.fixture
def admin():
    return Requester(user_id=UserId(value="admin-1"), is_admin=True)


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def room_repository():
    return InMemoryRoomRepository()


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def lambda_context():
    return FakeLambdaContext()


@pytest.fixture
def create_room():
    """Room を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        room_id: str = "room-1",
        room_type: str = "Deluxe Twin",
        price_amount: Decimal = Decimal("12000"),
        total_units: int = 2,
    ) -> Room:
        return Room(
            id=RoomId(value=room_id),
            room_type=room_type,
            price=Money.jpy(price_amount),
            total_units=total_units,
        )

    return _factory


@pytest.fixture
def create_booking():
    """Booking を生成する Factory fixture"""

    def _factory(
        status: BookingStatus = BookingStatus.PENDING,
        booking_id: str = "booking-1",
        user_id: str = "user-123",
        check_in: date = date(2025, 6, 1),
        check_out: date = date(2025, 6, 3),
        lines: list[tuple[str, int, Decimal]] | None = None,
        booking_date: datetime = datetime(2025, 5, 1, 9, 0, tzinfo=timezone.utc),
    ) -> Booking:
        lines = lines or [("room-1", 1, Decimal("12000"))]
        return Booking(
            id=BookingId(value=booking_id),
            user_id=UserId(value=user_id),
            stay_period=StayPeriod(check_in=check_in, check_out=check_out),
            lines=[
                BookingLine(
                    room_id=RoomId(value=room_id),
                    quantity=quantity,
                    price_per_night=Money.jpy(price),
                )
                for room_id, quantity, price in lines
            ],
            booking_date=booking_date,
            status=status,
        )

    return _factory


@pytest.fixture
def create_cart():
    """CartSnapshot を生成する Factory fixture

    lines は (room_id, quantity, check_in, check_out) のタプル
    """

    def _factory(
        lines: list[tuple[str, int, date, date]] | None = None,
        user_id: str = "user-123",
    ) -> CartSnapshot:
        if lines is None:
            lines = [("room-1", 1, date(2025, 6, 1), date(2025, 6, 3))]
        return CartSnapshot(
            user_id=UserId(value=user_id),
            lines=tuple(
                CartLine(
                    room_id=RoomId(value=room_id),
                    quantity=quantity,
                    check_in=check_in,
                    check_out=check_out,
                )
                for room_id, quantity, check_in, check_out in lines
            ),
        )

    return _factory


@pytest.fixture
def load_handler(monkeypatch):
    """ハンドラモジュールを読み込む（モジュール読み込み時に boto3 クライアントを生成するため環境変数を設定する）"""
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-1")
    monkeypatch.setenv("TABLE_NAME", "test-table")
    monkeypatch.setenv("POWERTOOLS_METRICS_NAMESPACE", "HotelBooking")

    def _load(module_name: str):
        return importlib.import_module(module_name)

    return _load


@pytest.fixture
def api_event():
    """API Gateway (REST) + Cognito オーソライザーのイベントを生成する Factory fixture"""

    def _factory(
        path_parameters: dict | None = None,
        query: dict | None = None,
        body: dict | None = None,
        sub: str | None = "user-123",
        groups: str | None = None,
    ) -> dict:
        claims: dict = {}
        if sub:
            claims["sub"] = sub
        if groups:
            claims["cognito:groups"] = groups
        return {
            "resource": "/",
            "path": "/",
            "httpMethod": "POST",
            "headers": {"Content-Type": "application/json"},
            "pathParameters": path_parameters,
            "queryStringParameters": query,
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
            "requestContext": {
                "requestId": "request-1",
                "authorizer": {"claims": claims},
            },
        }

    return _factory
