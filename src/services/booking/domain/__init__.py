from .enum import BookingStatus as BookingStatus
from .exception import (
    BookingNotFoundException as BookingNotFoundException,
)
from .exception import (
    EmptyCartException as EmptyCartException,
)
from .exception import (
    InconsistentDatesException as InconsistentDatesException,
)
from .exception import (
    InvalidDateRangeException as InvalidDateRangeException,
)
from .exception import (
    InvalidStatusTransitionException as InvalidStatusTransitionException,
)
from .exception import (
    RoomUnavailableException as RoomUnavailableException,
)
from .value_object import BookingId as BookingId
from .value_object import BookingLine as BookingLine
from .value_object import ReservedLine as ReservedLine
from .value_object import StayPeriod as StayPeriod
from .entity import Booking as Booking
from .factory import BookingFactory as BookingFactory
from .repository import BookingRepository as BookingRepository
from .service import AvailabilityChecker as AvailabilityChecker
