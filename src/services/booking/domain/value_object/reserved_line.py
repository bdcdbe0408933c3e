from dataclasses import dataclass

from services.booking.domain.enum import BookingStatus
from services.inventory.domain.value_object import RoomId

from .booking_id import BookingId
from .stay_period import StayPeriod


@dataclass(frozen=True)
class ReservedLine:
    """在庫集計用の予約明細（親予約のステータスと期間を含む）"""

    booking_id: BookingId
    room_id: RoomId
    quantity: int
    stay_period: StayPeriod
    status: BookingStatus
