from dataclasses import dataclass

from .user_id import UserId


@dataclass(frozen=True)
class Requester:
    """操作を要求した利用者

    認可は境界（アプリケーションサービス）で判定し、状態遷移そのものは関与しない。
    """

    user_id: UserId
    is_admin: bool = False

    def can_act_on(self, owner_id: UserId) -> bool:
        """所有者本人または管理者であれば操作できる"""
        return self.is_admin or self.user_id == owner_id
