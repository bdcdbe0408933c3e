from .booking_exceptions import (
    BookingNotFoundException as BookingNotFoundException,
)
from .booking_exceptions import (
    EmptyCartException as EmptyCartException,
)
from .booking_exceptions import (
    InconsistentDatesException as InconsistentDatesException,
)
from .booking_exceptions import (
    InvalidDateRangeException as InvalidDateRangeException,
)
from .booking_exceptions import (
    InvalidStatusTransitionException as InvalidStatusTransitionException,
)
from .booking_exceptions import (
    MixedCurrencyException as MixedCurrencyException,
)
from .booking_exceptions import (
    RoomUnavailableException as RoomUnavailableException,
)
