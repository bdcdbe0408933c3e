from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as _lambda
from constructs import Construct


class Scheduling(Construct):
    """定期実行を管理する Construct

    チェックアウト日を迎えた確定済み予約を毎日 COMPLETED にする
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        complete_bookings: _lambda.IFunction,
        hour: str = "0",
        minute: str = "15",
    ) -> None:
        super().__init__(scope, id)

        self.complete_rule = events.Rule(
            self,
            "CompleteBookingsRule",
            description="Mark confirmed bookings past their check-out date as completed",
            schedule=events.Schedule.cron(hour=hour, minute=minute),
        )
        self.complete_rule.add_target(targets.LambdaFunction(complete_bookings))
