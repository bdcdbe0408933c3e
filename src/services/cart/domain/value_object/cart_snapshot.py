from dataclasses import dataclass

from services.shared.domain import UserId

from .cart_line import CartLine


@dataclass(frozen=True)
class CartSnapshot:
    """チェックアウト時点のカート内容（明細の順序を保持する）"""

    user_id: UserId
    lines: tuple[CartLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.lines) == 0

    def has_consistent_dates(self) -> bool:
        """全明細のチェックイン日・チェックアウト日が一致しているか"""
        return len({line.dates for line in self.lines}) <= 1
