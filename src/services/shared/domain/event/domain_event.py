from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """ドメインイベント基底クラス

    集約の状態遷移を記録する。ログやメトリクスへの変換は呼び出し側で行う。
    """

    occurred_at: datetime = field(default_factory=_utcnow)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_log(self) -> dict:
        """構造化ログ用の辞書に変換する"""
        return {key: str(value) for key, value in asdict(self).items()}
