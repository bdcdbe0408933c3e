from pydantic import BaseModel

from services.booking.domain.entity import Booking


class BookingLineData(BaseModel):
    """予約明細データのレスポンスモデル"""

    room_id: str
    quantity: int
    price_per_night: str
    currency: str


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    user_id: str
    check_in_date: str
    check_out_date: str
    nights: int
    booking_date: str
    status: str
    total_amount: str
    currency: str
    lines: list[BookingLineData]


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData


class BookingListResponse(BaseModel):
    """予約一覧レスポンスモデル"""

    status: str = "success"
    count: int
    data: list[BookingData]


class AvailabilityData(BaseModel):
    """空室照会結果のレスポンスモデル"""

    room_id: str
    check_in_date: str
    check_out_date: str
    quantity: int
    available: bool
    available_units: int


def to_booking_data(booking: Booking) -> BookingData:
    """Booking エンティティをレスポンスモデルに変換する"""
    total = booking.total_price
    return BookingData(
        booking_id=str(booking.id),
        user_id=str(booking.user_id),
        check_in_date=booking.stay_period.check_in.isoformat(),
        check_out_date=booking.stay_period.check_out.isoformat(),
        nights=booking.number_of_nights,
        booking_date=booking.booking_date.isoformat(),
        status=booking.status.value,
        total_amount=str(total.amount),
        currency=str(total.currency),
        lines=[
            BookingLineData(
                room_id=str(line.room_id),
                quantity=line.quantity,
                price_per_night=str(line.price_per_night.amount),
                currency=str(line.price_per_night.currency),
            )
            for line in booking.lines
        ],
    )


def to_response(booking: Booking) -> dict:
    """Booking エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(data=to_booking_data(booking)).model_dump()


def to_list_response(bookings: list[Booking]) -> dict:
    return BookingListResponse(
        count=len(bookings),
        data=[to_booking_data(b) for b in bookings],
    ).model_dump()
