from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.applications.get_bookings import BookingQueryService
from services.booking.domain.entity import Booking
from services.booking.handlers.request_models import ListBookingsQuery
from services.booking.handlers.response_models import to_list_response
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.inventory.domain.value_object import RoomId
from services.shared.domain import DomainException, Requester, UserId
from services.shared.utils import (
    api_response,
    error_response,
    internal_error_response,
    requester_from_event,
    validation_error_response,
)

logger = Logger()

repository = DynamoDBBookingRepository()
service = BookingQueryService(repository=repository)


def _list(query: ListBookingsQuery, requester: Requester) -> list[Booking]:
    if query.room_id:
        return service.list_bookings_for_room(RoomId(value=query.room_id), requester)
    if query.scope == "all":
        return service.list_all_bookings(requester)
    user_id = UserId(value=query.user_id) if query.user_id else requester.user_id
    return service.list_user_bookings(user_id, requester, category=query.category)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約一覧取得 Lambda Handler"""
    try:
        query = ListBookingsQuery.model_validate(event.query_string_parameters or {})
        requester = requester_from_event(event)
        logger.info(
            "Listing bookings",
            extra={"category": query.category.value, "scope": query.scope},
        )
        bookings = _list(query, requester)
        return api_response(200, to_list_response(bookings))

    except ValidationError as e:
        return validation_error_response(e)
    except DomainException as e:
        logger.warning("Booking listing rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to list bookings")
        return internal_error_response()
