from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """Repository 基底クラス

    参照と削除のみを共通化する。新規作成や状態更新の条件は集約ごとに異なるため各リポジトリで定義する。
    """

    @abstractmethod
    def find_by_id(self, id: ID) -> T | None:
        """IDで検索する。存在しなければ None"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, id: ID) -> None:
        raise NotImplementedError
