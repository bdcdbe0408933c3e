from collections.abc import Callable
from datetime import date

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.exception import (
    BookingNotFoundException,
    InvalidStatusTransitionException,
)
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import BookingId
from services.shared.domain.exception import OptimisticLockException

# 一括完了で1件ずつ読み飛ばす失敗（他の予約の処理は続ける）
_SKIPPABLE_ERRORS = (OptimisticLockException, InvalidStatusTransitionException)


class CompleteBookingService:
    """宿泊完了のユースケース（スケジューラから呼び出される）"""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def complete(self, booking_id: BookingId, as_of: date) -> Booking:
        """確定済み予約を完了にする。完了済みなら何もしない"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundException(booking_id)
        self._complete(booking, as_of)
        return booking

    def complete_due(
        self,
        as_of: date,
        on_skipped: Callable[[Booking, Exception], None] | None = None,
    ) -> list[Booking]:
        """チェックアウト日を迎えた確定済み予約をまとめて完了にする

        一覧取得後に他の処理で状態が変わった予約は完了にせず、on_skipped に渡して次へ進む。
        """
        completed: list[Booking] = []
        for booking in self._repository.find_by_status(BookingStatus.CONFIRMED):
            # スキャン結果は結果整合のため、読み込んだ予約の状態で判定し直す
            if booking.status != BookingStatus.CONFIRMED:
                continue
            if not booking.stay_period.has_ended_by(as_of):
                continue
            try:
                self._complete(booking, as_of)
            except _SKIPPABLE_ERRORS as e:
                if on_skipped is not None:
                    on_skipped(booking, e)
                continue
            completed.append(booking)
        return completed

    def _complete(self, booking: Booking, as_of: date) -> None:
        expected_status = booking.status
        if booking.complete(as_of):
            self._repository.update(booking, expected_status=expected_status)
