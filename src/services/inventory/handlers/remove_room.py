from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.inventory.applications.remove_room import RemoveRoomService
from services.inventory.domain.value_object import RoomId
from services.inventory.infrastructure.dynamodb_room_repository import (
    DynamoDBRoomRepository,
)
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    error_response,
    internal_error_response,
    requester_from_event,
)

logger = Logger()

service = RemoveRoomService(
    room_repository=DynamoDBRoomRepository(),
    booking_repository=DynamoDBBookingRepository(),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """客室削除 Lambda Handler（管理者用）"""
    room_id = (event.path_parameters or {}).get("room_id")
    if not room_id:
        return api_response(400, {"error": "VALIDATION_ERROR", "message": "room_id is required"})

    logger.info("Received remove room request", extra={"room_id": room_id})

    try:
        requester = requester_from_event(event)
        service.remove(RoomId(value=room_id), requester)
        logger.info("Room removed", extra={"room_id": room_id})
        return api_response(200, {"status": "success", "room_id": room_id})

    except DomainException as e:
        logger.warning("Room removal rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to remove room")
        return internal_error_response()
