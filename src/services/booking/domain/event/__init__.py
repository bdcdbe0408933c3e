from .booking_events import BookingCancelled as BookingCancelled
from .booking_events import BookingCompleted as BookingCompleted
from .booking_events import BookingConfirmed as BookingConfirmed
from .booking_events import BookingCreated as BookingCreated
from .booking_events import BookingDeleted as BookingDeleted
