from aws_lambda_powertools import Logger

from services.shared.domain import AggregateRoot


def log_domain_events(logger: Logger, aggregate: AggregateRoot) -> None:
    """集約に記録されたドメインイベントを構造化ログとして出力する"""
    for event in aggregate.flush_domain_events():
        logger.info(event.name, extra={"domain_event": event.to_log()})
