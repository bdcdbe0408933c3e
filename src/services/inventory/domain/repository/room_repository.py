from abc import abstractmethod

from services.inventory.domain.entity import Room
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Repository


class RoomRepository(Repository[Room, RoomId]):
    """客室レポジトリのインターフェース

    客室の登録・編集は管理画面側の責務のため、ここでは参照と削除のみ扱う
    """

    @abstractmethod
    def find_by_id(self, room_id: RoomId) -> Room | None:
        """客室IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, room_id: RoomId) -> None:
        """客室を削除する"""
        raise NotImplementedError
