from aws_lambda_powertools import Logger, Metrics
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.domain.value_object import BookingId
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.payment.applications.capture_payment import CapturePaymentService
from services.payment.applications.payment_completion import (
    PaymentCompletionHandler,
)
from services.payment.domain.exception import (
    CaptureFailedException,
    ConfirmedPaymentUnrecordedException,
)
from services.payment.handlers.request_models import CapturePaymentRequest
from services.payment.handlers.response_models import CaptureData, CaptureResponse
from services.payment.infrastructure.paypal_payment_gateway import (
    PayPalPaymentGateway,
)
from services.shared.domain import DomainException
from services.shared.utils import (
    api_response,
    error_response,
    internal_error_response,
    log_domain_events,
    requester_from_event,
    validation_error_response,
)

logger = Logger()
metrics = Metrics()

repository = DynamoDBBookingRepository()
service = CapturePaymentService(
    repository=repository,
    gateway=PayPalPaymentGateway(),
    completion_handler=PaymentCompletionHandler(repository=repository),
)


@logger.inject_lambda_context
@metrics.log_metrics
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """決済確定 Lambda Handler（PayPal 承認後に呼び出される）"""
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"error": "VALIDATION_ERROR", "message": "booking_id is required"})

    try:
        request = CapturePaymentRequest.model_validate(event.json_body if event.body else {})
        logger.append_keys(booking_id=booking_id, order_id=request.order_id)
        logger.info("Received capture payment request")

        requester = requester_from_event(event)
        result = service.capture(BookingId(value=booking_id), request.order_id, requester)
        log_domain_events(logger, result.booking)
        logger.info("Payment captured", extra={"outcome": result.outcome.value})
        return api_response(
            200,
            CaptureResponse(
                data=CaptureData(
                    booking_id=booking_id,
                    order_id=request.order_id,
                    outcome=result.outcome.value,
                    booking_status=result.booking.status.value,
                )
            ).model_dump(),
        )

    except ValidationError as e:
        return validation_error_response(e)
    except ConfirmedPaymentUnrecordedException as e:
        logger.critical(
            "Payment captured but booking was not confirmed",
            extra={"reconciliation_required": True, "reason": e.reason},
        )
        metrics.add_metric(name="ConfirmedPaymentUnrecorded", unit=MetricUnit.Count, value=1)
        return error_response(e)
    except CaptureFailedException as e:
        logger.warning("Payment capture failed", extra={"reason": str(e)})
        return error_response(e)
    except DomainException as e:
        logger.warning("Capture rejected", extra={"error": e.code, "reason": str(e)})
        return error_response(e)
    except Exception:
        logger.exception("Failed to capture payment")
        return internal_error_response()
