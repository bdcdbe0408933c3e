from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from functools import reduce

from services.booking.domain.enum import BookingStatus
from services.booking.domain.event import (
    BookingCancelled,
    BookingCompleted,
    BookingConfirmed,
    BookingCreated,
    BookingDeleted,
)
from services.booking.domain.exception import InvalidStatusTransitionException
from services.booking.domain.value_object import BookingId, BookingLine, StayPeriod
from services.shared.domain import AggregateRoot, Money, UserId


class Booking(AggregateRoot[BookingId]):
    """予約集約

    ステータスは confirm / cancel / complete を通してのみ変更できる。
    明細と滞在期間は作成後に変更しない。
    """

    def __init__(
        self,
        id: BookingId,
        user_id: UserId,
        stay_period: StayPeriod,
        lines: Sequence[BookingLine],
        booking_date: datetime,
        status: BookingStatus = BookingStatus.PENDING,
    ) -> None:
        if not lines:
            raise ValueError("Booking must have at least one line")
        super().__init__(id)
        self._user_id = user_id
        self._stay_period = stay_period
        self._lines = tuple(lines)
        self._booking_date = booking_date
        self._status = status

    @classmethod
    def place(
        cls,
        id: BookingId,
        user_id: UserId,
        stay_period: StayPeriod,
        lines: Sequence[BookingLine],
        booking_date: datetime,
    ) -> Booking:
        """PENDING 状態の新規予約を作成する"""
        booking = cls(
            id=id,
            user_id=user_id,
            stay_period=stay_period,
            lines=lines,
            booking_date=booking_date,
        )
        total = booking.total_price
        booking.add_domain_event(
            BookingCreated(
                booking_id=str(id),
                user_id=str(user_id),
                check_in=stay_period.check_in.isoformat(),
                check_out=stay_period.check_out.isoformat(),
                total_amount=str(total.amount),
                currency=str(total.currency),
                line_count=len(booking.lines),
            )
        )
        return booking

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def stay_period(self) -> StayPeriod:
        return self._stay_period

    @property
    def lines(self) -> tuple[BookingLine, ...]:
        return self._lines

    @property
    def booking_date(self) -> datetime:
        return self._booking_date

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def number_of_nights(self) -> int:
        return self._stay_period.nights()

    @property
    def total_price(self) -> Money:
        nights = self.number_of_nights
        return reduce(
            Money.add,
            (line.total_price(nights) for line in self._lines),
        )

    def is_owned_by(self, user_id: UserId) -> bool:
        return self._user_id == user_id

    def confirm(self) -> bool:
        """決済完了により予約を確定する

        既に CONFIRMED の場合は何もせず False を返す（決済確定の二重通知を許容する）
        """
        if self._status == BookingStatus.CONFIRMED:
            return False
        self._transition_to(BookingStatus.CONFIRMED, "confirm")
        self.add_domain_event(BookingConfirmed(booking_id=str(self.id)))
        return True

    def cancel(self) -> bool:
        """予約をキャンセルする（在庫を解放する）"""
        if self._status == BookingStatus.CANCELLED:
            return False
        previous = self._status
        self._transition_to(BookingStatus.CANCELLED, "cancel")
        self.add_domain_event(
            BookingCancelled(booking_id=str(self.id), previous_status=previous.value)
        )
        return True

    def complete(self, as_of: date) -> bool:
        """チェックアウト日を過ぎた確定済み予約を完了にする"""
        if self._status == BookingStatus.COMPLETED:
            return False
        if self._status == BookingStatus.CONFIRMED and not self._stay_period.has_ended_by(
            as_of
        ):
            raise InvalidStatusTransitionException(
                self._status, "complete before check-out"
            )
        self._transition_to(BookingStatus.COMPLETED, "complete")
        self.add_domain_event(BookingCompleted(booking_id=str(self.id)))
        return True

    def mark_deleted(self) -> None:
        """物理削除の前提条件を検証する（PENDING のみ削除可能）"""
        if self._status != BookingStatus.PENDING:
            raise InvalidStatusTransitionException(self._status, "delete")
        self.add_domain_event(BookingDeleted(booking_id=str(self.id)))

    def _transition_to(self, target: BookingStatus, action: str) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidStatusTransitionException(self._status, action)
        self._status = target
