from .booking_id import BookingId as BookingId
from .booking_line import BookingLine as BookingLine
from .reserved_line import ReservedLine as ReservedLine
from .stay_period import StayPeriod as StayPeriod
