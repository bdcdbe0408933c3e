from abc import abstractmethod

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.value_object import BookingId, ReservedLine, StayPeriod
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Repository, UserId


class BookingRepository(Repository[Booking, BookingId]):
    """予約レポジトリのインターフェース"""

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """予約と明細をまとめて新規保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約のステータスを更新する

        expected_status を指定した場合、保存済みのステータスが一致しなければ
        OptimisticLockException を送出する
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: BookingId) -> None:
        """PENDING の予約を明細ごと物理削除する"""
        raise NotImplementedError

    @abstractmethod
    def list_overlapping(
        self, room_id: RoomId, stay_period: StayPeriod
    ) -> list[ReservedLine]:
        """期間が重なる、キャンセル以外の予約明細を取得する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_user_id(self, user_id: UserId) -> list[Booking]:
        """利用者の予約を新しい順に取得する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_room_id(self, room_id: RoomId) -> list[Booking]:
        """客室を含む予約を新しい順に取得する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        """ステータスで予約を取得する"""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Booking]:
        """全予約を新しい順に取得する"""
        raise NotImplementedError
