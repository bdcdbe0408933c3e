from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from services.booking.domain.exception import InvalidDateRangeException


@dataclass(frozen=True)
class StayPeriod:
    """滞在期間 [チェックイン日, チェックアウト日)"""

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidDateRangeException()

    @classmethod
    def from_iso(cls, check_in: str, check_out: str) -> StayPeriod:
        """YYYY-MM-DD 形式の文字列から生成する"""
        try:
            check_in_date = date.fromisoformat(check_in)
            check_out_date = date.fromisoformat(check_out)
        except ValueError as e:
            raise ValueError(f"Invalid date format: {e}") from e
        return cls(check_in=check_in_date, check_out=check_out_date)

    def nights(self) -> int:
        """宿泊数を計算する"""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: StayPeriod) -> bool:
        """半開区間同士が重なるか"""
        return self.check_in < other.check_out and other.check_in < self.check_out

    def has_ended_by(self, as_of: date) -> bool:
        """as_of の時点でチェックアウト日を迎えているか"""
        return self.check_out <= as_of
