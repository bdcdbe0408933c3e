from datetime import datetime, timezone

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    EventBridgeEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.complete_booking import CompleteBookingService
from services.booking.domain.entity import Booking
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.shared.utils import log_domain_events

logger = Logger()

repository = DynamoDBBookingRepository()
service = CompleteBookingService(repository=repository)


def _log_skipped(booking: Booking, error: Exception) -> None:
    logger.warning(
        "Skipped completing booking",
        extra={"booking_id": str(booking.id), "reason": str(error)},
    )


@logger.inject_lambda_context
@event_source(data_class=EventBridgeEvent)
def lambda_handler(event: EventBridgeEvent, context: LambdaContext) -> dict:
    """チェックアウト日を迎えた予約を完了にする（日次スケジュール）"""
    if event.get("time"):
        as_of = datetime.fromisoformat(event.time).date()
    else:
        as_of = datetime.now(timezone.utc).date()
    logger.info("Completing due bookings", extra={"as_of": as_of.isoformat()})

    completed = service.complete_due(as_of, on_skipped=_log_skipped)
    for booking in completed:
        log_domain_events(logger, booking)

    logger.info("Completed due bookings", extra={"count": len(completed)})
    return {
        "status": "success",
        "as_of": as_of.isoformat(),
        "completed": [str(b.id) for b in completed],
    }
