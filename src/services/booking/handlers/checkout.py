from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.checkout_cart import CheckoutCartService
from services.booking.applications.create_booking_from_cart import (
    CreateBookingFromCartService,
)
from services.booking.domain.factory import BookingFactory
from services.booking.domain.service import AvailabilityChecker
from services.booking.handlers.response_models import to_response
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.cart.infrastructure.dynamodb_cart_repository import (
    DynamoDBCartRepository,
)
from services.inventory.infrastructure.dynamodb_room_repository import (
    DynamoDBRoomRepository,
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

booking_repository = DynamoDBBookingRepository()
room_repository = DynamoDBRoomRepository()
cart_repository = DynamoDBCartRepository()
create_service = CreateBookingFromCartService(
    repository=booking_repository,
    room_repository=room_repository,
    availability_checker=AvailabilityChecker(
        room_repository=room_repository,
        booking_repository=booking_repository,
    ),
    factory=BookingFactory(),
)
service = CheckoutCartService(
    cart_repository=cart_repository,
    create_booking_service=create_service,
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """カートのチェックアウト（予約作成）Lambda Handler"""
    try:
        requester = requester_from_event(event)
        logger.append_keys(user_id=str(requester.user_id))
        logger.info("Received checkout request")

        result = service.checkout(requester)
        log_domain_events(logger, result.booking)
        if not result.cart_cleared:
            logger.warning(
                "Booking created but cart was not cleared",
                extra={
                    "booking_id": str(result.booking.id),
                    "reason": str(result.cart_clear_error),
                },
            )
        return api_response(201, to_response(result.booking))

    except DomainException as e:
        logger.warning("Checkout rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to checkout cart")
        return internal_error_response()
