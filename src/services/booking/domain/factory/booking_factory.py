from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TypedDict

from services.booking.domain.entity import Booking
from services.booking.domain.value_object import BookingId, BookingLine, StayPeriod
from services.inventory.domain.entity import Room
from services.shared.domain import UserId


class LineDetails(TypedDict):
    """予約明細の入力データ構造（TypedDict）"""

    room: Room
    quantity: int


class BookingFactory:
    """予約集約を生成するFactory"""

    def create(
        self,
        user_id: UserId,
        stay_period: StayPeriod,
        line_details: Sequence[LineDetails],
        booked_at: datetime | None = None,
    ) -> Booking:
        """新規予約のエンティティを作成する

        客室の現在料金を price_per_night にコピーし、以後の料金改定と切り離す
        """
        lines = [
            BookingLine(
                room_id=detail["room"].id,
                quantity=detail["quantity"],
                price_per_night=detail["room"].price,
            )
            for detail in line_details
        ]
        return Booking.place(
            id=BookingId.generate(),
            user_id=user_id,
            stay_period=stay_period,
            lines=lines,
            booking_date=booked_at or datetime.now(timezone.utc),
        )
