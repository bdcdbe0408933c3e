from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス

    PENDING -> CONFIRMED -> COMPLETED
    PENDING / CONFIRMED -> CANCELLED
    CANCELLED と COMPLETED は終端状態
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    @property
    def occupies_capacity(self) -> bool:
        """在庫を消費しているか（キャンセルのみ在庫を解放する）"""
        return self is not BookingStatus.CANCELLED

    def can_transition_to(self, target: "BookingStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}
