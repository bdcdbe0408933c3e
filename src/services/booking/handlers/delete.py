from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.delete_booking import DeleteBookingService
from services.booking.domain.value_object import BookingId
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
service = DeleteBookingService(repository=repository)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """未決済予約の削除 Lambda Handler"""
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"error": "VALIDATION_ERROR", "message": "booking_id is required"})

    logger.info("Received delete booking request", extra={"booking_id": booking_id})

    try:
        requester = requester_from_event(event)
        booking = service.delete(BookingId(value=booking_id), requester)
        log_domain_events(logger, booking)
        return api_response(200, {"status": "success", "booking_id": booking_id})

    except DomainException as e:
        logger.warning("Deletion rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to delete booking")
        return internal_error_response()
