from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.domain.value_object import BookingId
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.payment.applications.create_payment_order import (
    CreatePaymentOrderService,
)
from services.payment.handlers.response_models import (
    PaymentOrderData,
    PaymentOrderResponse,
)
from services.payment.infrastructure.paypal_payment_gateway import (
    PayPalPaymentGateway,
)
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    error_response,
    internal_error_response,
    requester_from_event,
)

logger = Logger()

repository = DynamoDBBookingRepository()
gateway = PayPalPaymentGateway()
service = CreatePaymentOrderService(repository=repository, gateway=gateway)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """支払い注文作成 Lambda Handler"""
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"error": "VALIDATION_ERROR", "message": "booking_id is required"})

    logger.info("Received create payment order request", extra={"booking_id": booking_id})

    try:
        requester = requester_from_event(event)
        order = service.create_order(BookingId(value=booking_id), requester)
        logger.info(
            "Payment order created",
            extra={"booking_id": booking_id, "order_id": order.order_id},
        )
        return api_response(
            201,
            PaymentOrderResponse(
                data=PaymentOrderData(
                    booking_id=booking_id,
                    order_id=order.order_id,
                    approval_url=order.approval_url,
                )
            ).model_dump(),
        )

    except DomainException as e:
        logger.warning("Payment order rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to create payment order")
        return internal_error_response()
