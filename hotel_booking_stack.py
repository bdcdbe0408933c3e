from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_cognito as cognito
from aws_cdk import aws_secretsmanager as secretsmanager
from constructs import Construct

from infra.constructs import (
    Api,
    Database,
    Functions,
    Layers,
    Observability,
    Scheduling,
)


class HotelBookingStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        user_pool_arn: str,
        paypal_mode: str = "sandbox",
        payment_return_url: str = "",
        payment_cancel_url: str = "",
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        database = Database(self, "Database")
        layers = Layers(self, "Layers")

        # 値はデプロイ後に {"client_id": ..., "client_secret": ...} を手動で設定する
        paypal_secret = secretsmanager.Secret(
            self,
            "PayPalSecret",
            secret_name="/hotel-booking/paypal",
            description="PayPal REST API client credentials",
        )

        fns = Functions(
            self,
            "Functions",
            table=database.table,
            common_layer=layers.common_layer,
            paypal_secret=paypal_secret,
            paypal_mode=paypal_mode,
            payment_return_url=payment_return_url,
            payment_cancel_url=payment_cancel_url,
        )

        user_pool = cognito.UserPool.from_user_pool_arn(self, "UserPool", user_pool_arn)

        api = Api(
            self,
            "Api",
            user_pool=user_pool,
            availability=fns.availability,
            remove_room=fns.remove_room,
            checkout=fns.checkout,
            list_bookings=fns.list_bookings,
            get_booking=fns.get_booking,
            cancel_booking=fns.cancel_booking,
            delete_booking=fns.delete_booking,
            create_payment_order=fns.create_payment_order,
            capture_payment=fns.capture_payment,
        )

        Scheduling(self, "Scheduling", complete_bookings=fns.complete_bookings)

        Observability(self, "Observability", functions=fns.all_functions)

        CfnOutput(self, "ApiUrl", value=api.rest_api.url)
        CfnOutput(self, "TableName", value=database.table.table_name)
