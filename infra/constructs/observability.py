from aws_cdk import Duration, SecretValue
from aws_cdk import aws_cloudwatch as cloudwatch
from aws_cdk import aws_cloudwatch_actions as cloudwatch_actions
from aws_cdk import aws_lambda as _lambda
from aws_cdk import aws_secretsmanager as secretsmanager
from aws_cdk import aws_sns as sns
from constructs import Construct
from datadog_cdk_constructs_v2 import DatadogLambda


class Observability(Construct):
    """可観測性を管理する Construct

    1. 入金済み・予約未確定（ConfirmedPaymentUnrecorded）のアラームと通知先トピック
    2. Lambda の Datadog 計装
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        functions: list[_lambda.Function],
        metrics_namespace: str = "HotelBooking",
        payment_service_name: str = "payment-service",
        datadog_api_key_ssm_parameter_name: str = "/hotel-booking/datadog-api-key",
        service_name: str = "hotel-booking",
        env: str = "dev",
    ) -> None:
        super().__init__(scope, id)

        # 1. 突き合わせが必要な決済の検知
        self.reconciliation_topic = sns.Topic(
            self,
            "ReconciliationTopic",
            display_name="Hotel booking payment reconciliation",
        )

        self.unrecorded_payment_alarm = cloudwatch.Alarm(
            self,
            "ConfirmedPaymentUnrecordedAlarm",
            alarm_description=(
                "Payment was captured but the booking could not be confirmed. "
                "Manual reconciliation required."
            ),
            metric=cloudwatch.Metric(
                namespace=metrics_namespace,
                metric_name="ConfirmedPaymentUnrecorded",
                dimensions_map={"service": payment_service_name},
                statistic="Sum",
                period=Duration.minutes(1),
            ),
            threshold=1,
            evaluation_periods=1,
            comparison_operator=cloudwatch.ComparisonOperator.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
            treat_missing_data=cloudwatch.TreatMissingData.NOT_BREACHING,
        )
        self.unrecorded_payment_alarm.add_alarm_action(
            cloudwatch_actions.SnsAction(self.reconciliation_topic)
        )

        # 2. Lambda Functions の計装
        api_key_secret = secretsmanager.Secret(
            self,
            "DatadogApiKeySecret",
            secret_string_value=SecretValue.ssm_secure(
                datadog_api_key_ssm_parameter_name
            ),
        )

        datadog_lambda = DatadogLambda(
            self,
            "DatadogLambda",
            python_layer_version=122,
            extension_layer_version=92,
            api_key_secret_arn=api_key_secret.secret_arn,
            enable_datadog_tracing=True,
            enable_datadog_logs=True,
            capture_lambda_payload=False,
            site="datadoghq.com",
            service=service_name,
            env=env,
        )
        datadog_lambda.add_lambda_functions(functions)
