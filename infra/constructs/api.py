from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_cognito as cognito
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Api(Construct):
    """API Gateway Construct

    認証は外部の Cognito ユーザープールに委ね、全メソッドに Cognito オーソライザーを付与する
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        user_pool: cognito.IUserPool,
        availability: _lambda.IFunction,
        remove_room: _lambda.IFunction,
        checkout: _lambda.IFunction,
        list_bookings: _lambda.IFunction,
        get_booking: _lambda.IFunction,
        cancel_booking: _lambda.IFunction,
        delete_booking: _lambda.IFunction,
        create_payment_order: _lambda.IFunction,
        capture_payment: _lambda.IFunction,
    ) -> None:
        super().__init__(scope, id)

        self.rest_api = apigw.RestApi(
            self,
            "HotelBookingRestApi",
            rest_api_name="Hotel Booking API",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                throttling_burst_limit=20,
                throttling_rate_limit=10,
            ),
        )

        self._authorizer = apigw.CognitoUserPoolsAuthorizer(
            self,
            "CognitoAuthorizer",
            cognito_user_pools=[user_pool],
        )

        # /rooms/{room_id}
        room_resource = self.rest_api.root.add_resource("rooms").add_resource(
            "{room_id}"
        )
        self._add_method(room_resource, "DELETE", remove_room)
        self._add_method(room_resource.add_resource("availability"), "GET", availability)

        # /bookings
        bookings_resource = self.rest_api.root.add_resource("bookings")
        self._add_method(bookings_resource, "POST", checkout)
        self._add_method(bookings_resource, "GET", list_bookings)

        # /bookings/{booking_id}
        booking_resource = bookings_resource.add_resource("{booking_id}")
        self._add_method(booking_resource, "GET", get_booking)
        self._add_method(booking_resource, "DELETE", delete_booking)
        self._add_method(booking_resource.add_resource("cancel"), "POST", cancel_booking)
        self._add_method(
            booking_resource.add_resource("payment-order"), "POST", create_payment_order
        )
        self._add_method(booking_resource.add_resource("capture"), "POST", capture_payment)

    def _add_method(
        self, resource: apigw.IResource, http_method: str, fn: _lambda.IFunction
    ) -> None:
        resource.add_method(
            http_method,
            apigw.LambdaIntegration(fn),
            authorizer=self._authorizer,
            authorization_type=apigw.AuthorizationType.COGNITO,
        )
