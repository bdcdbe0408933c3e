from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.domain.service import AvailabilityChecker
from services.booking.domain.value_object import StayPeriod
from services.booking.handlers.request_models import AvailabilityQuery
from services.booking.handlers.response_models import AvailabilityData
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.inventory.domain import RoomNotFoundException
from services.inventory.domain.value_object import RoomId
from services.inventory.infrastructure.dynamodb_room_repository import (
    DynamoDBRoomRepository,
)
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    error_response,
    internal_error_response,
    validation_error_response,
)

logger = Logger()

room_repository = DynamoDBRoomRepository()
checker = AvailabilityChecker(
    room_repository=room_repository,
    booking_repository=DynamoDBBookingRepository(),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """客室の空室照会 Lambda Handler

    日付の前後が逆の期間は入力エラーにせず available=false として返す
    """
    room_id = (event.path_parameters or {}).get("room_id")
    if not room_id:
        return api_response(400, {"error": "VALIDATION_ERROR", "message": "room_id is required"})

    try:
        query = AvailabilityQuery.model_validate(event.query_string_parameters or {})
        logger.info(
            "Checking availability",
            extra={
                "room_id": room_id,
                "check_in": query.check_in.isoformat(),
                "check_out": query.check_out.isoformat(),
                "quantity": query.quantity,
            },
        )

        room = room_repository.find_by_id(RoomId(value=room_id))
        if room is None:
            raise RoomNotFoundException(room_id)
        available = checker.is_available(
            room.id, query.check_in, query.check_out, query.quantity
        )
        units = (
            checker.available_units(
                room, StayPeriod(check_in=query.check_in, check_out=query.check_out)
            )
            if query.check_in < query.check_out
            else 0
        )
        data = AvailabilityData(
            room_id=room_id,
            check_in_date=query.check_in.isoformat(),
            check_out_date=query.check_out.isoformat(),
            quantity=query.quantity,
            available=available,
            available_units=units,
        )
        return api_response(200, {"status": "success", "data": data.model_dump()})

    except ValidationError as e:
        return validation_error_response(e)
    except DomainException as e:
        logger.warning("Availability check rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to check availability")
        return internal_error_response()
