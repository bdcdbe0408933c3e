from abc import ABC, abstractmethod

from services.cart.domain.value_object import CartSnapshot
from services.shared.domain import UserId


class CartRepository(ABC):
    """カートレポジトリのインターフェース

    カートの編集はカート管理側の責務。予約処理はスナップショットの取得とクリアのみ行う。
    """

    @abstractmethod
    def get_snapshot(self, user_id: UserId) -> CartSnapshot:
        """利用者のカート内容を取得する（カートが無い場合は空のスナップショット）"""
        raise NotImplementedError

    @abstractmethod
    def clear(self, user_id: UserId) -> None:
        """カートを空にする"""
        raise NotImplementedError
