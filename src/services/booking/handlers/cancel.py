from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.cancel_booking import CancelBookingService
from services.booking.domain.value_object import BookingId
from services.booking.handlers.response_models import to_response
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    error_response,
    internal_error_response,
    log_domain_events,
    requester_from_event,
)

logger = Logger()

repository = DynamoDBBookingRepository()
service = CancelBookingService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler"""
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"error": "VALIDATION_ERROR", "message": "booking_id is required"})

    logger.info("Received cancel booking request", extra={"booking_id": booking_id})

    try:
        requester = requester_from_event(event)
        booking = service.cancel(BookingId(value=booking_id), requester)
        log_domain_events(logger, booking)
        return api_response(200, to_response(booking))

    except DomainException as e:
        logger.warning("Cancellation rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to cancel booking")
        return internal_error_response()
