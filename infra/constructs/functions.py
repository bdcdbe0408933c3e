import datetime

from aws_cdk import Duration
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

METRICS_NAMESPACE = "HotelBooking"


class Functions(Construct):
    """Lambda 関数を管理する Construct"""

    def __init__(
        self,
        scope: Construct,
        id: str,
        table: dynamodb.Table,
        common_layer: _lambda.LayerVersion,
        paypal_secret: secretsmanager.ISecret,
        paypal_mode: str = "sandbox",
        payment_return_url: str = "",
        payment_cancel_url: str = "",
    ) -> None:
        super().__init__(scope, id)
        self._table = table
        self._common_layer = common_layer

        # 参照系
        self.availability = self._create_function(
            "AvailabilityLambda",
            "services.booking.handlers.availability.lambda_handler",
            "booking-service",
        )
        self.get_booking = self._create_function(
            "GetBookingLambda",
            "services.booking.handlers.get_booking.lambda_handler",
            "booking-service",
        )
        self.list_bookings = self._create_function(
            "ListBookingsLambda",
            "services.booking.handlers.list_bookings.lambda_handler",
            "booking-service",
        )
        for fn in [self.availability, self.get_booking, self.list_bookings]:
            table.grant_read_data(fn)

        # 更新系
        self.checkout = self._create_function(
            "CheckoutLambda",
            "services.booking.handlers.checkout.lambda_handler",
            "booking-service",
        )
        self.cancel_booking = self._create_function(
            "CancelBookingLambda",
            "services.booking.handlers.cancel.lambda_handler",
            "booking-service",
        )
        self.delete_booking = self._create_function(
            "DeleteBookingLambda",
            "services.booking.handlers.delete.lambda_handler",
            "booking-service",
        )
        self.complete_bookings = self._create_function(
            "CompleteBookingsLambda",
            "services.booking.handlers.complete.lambda_handler",
            "booking-service",
            timeout=Duration.minutes(5),
        )
        self.remove_room = self._create_function(
            "RemoveRoomLambda",
            "services.inventory.handlers.remove_room.lambda_handler",
            "inventory-service",
        )

        payment_environment = {
            "PAYPAL_SECRET_ARN": paypal_secret.secret_arn,
            "PAYPAL_MODE": paypal_mode,
            "PAYMENT_RETURN_URL": payment_return_url,
            "PAYMENT_CANCEL_URL": payment_cancel_url,
        }
        self.create_payment_order = self._create_function(
            "CreatePaymentOrderLambda",
            "services.payment.handlers.create_order.lambda_handler",
            "payment-service",
            extra_environment=payment_environment,
        )
        self.capture_payment = self._create_function(
            "CapturePaymentLambda",
            "services.payment.handlers.capture.lambda_handler",
            "payment-service",
            extra_environment=payment_environment,
        )
        for fn in [self.create_payment_order, self.capture_payment]:
            paypal_secret.grant_read(fn)

        for fn in [
            self.checkout,
            self.cancel_booking,
            self.delete_booking,
            self.complete_bookings,
            self.remove_room,
            self.create_payment_order,
            self.capture_payment,
        ]:
            table.grant_read_write_data(fn)

    @property
    def all_functions(self) -> list[_lambda.Function]:
        return [
            self.availability,
            self.get_booking,
            self.list_bookings,
            self.checkout,
            self.cancel_booking,
            self.delete_booking,
            self.complete_bookings,
            self.remove_room,
            self.create_payment_order,
            self.capture_payment,
        ]

    def _create_function(
        self,
        id: str,
        handler: str,
        service_name: str,
        timeout: Duration = Duration.seconds(29),
        extra_environment: dict[str, str] | None = None,
    ) -> _lambda.Function:
        environment = {
            "TABLE_NAME": self._table.table_name,
            "POWERTOOLS_SERVICE_NAME": service_name,
            "POWERTOOLS_METRICS_NAMESPACE": METRICS_NAMESPACE,
            "DEPLOY_TIME": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }
        if extra_environment:
            environment.update(extra_environment)
        return _lambda.Function(
            self,
            id,
            runtime=_lambda.Runtime.PYTHON_3_14,
            handler=handler,
            code=_lambda.Code.from_asset("src"),
            layers=[self._common_layer],
            timeout=timeout,
            environment=environment,
        )
