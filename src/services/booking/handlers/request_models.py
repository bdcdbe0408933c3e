from datetime import date

from pydantic import BaseModel, Field

from services.booking.applications.get_bookings import BookingCategory


class AvailabilityQuery(BaseModel):
    """空室照会のクエリパラメータ"""

    check_in: date
    check_out: date
    quantity: int = Field(default=1, gt=0)


class ListBookingsQuery(BaseModel):
    """予約一覧のクエリパラメータ

    scope=all, room_id, user_id は管理者のみ指定できる
    """

    category: BookingCategory = BookingCategory.ALL
    scope: str | None = Field(default=None, pattern="^(all)$")
    room_id: str | None = Field(default=None, min_length=1)
    user_id: str | None = Field(default=None, min_length=1)
