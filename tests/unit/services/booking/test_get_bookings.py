from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from services.booking.applications.get_bookings import (
    BookingCategory,
    BookingQueryService,
)
from services.booking.domain.enum import BookingStatus
from services.booking.domain.exception import BookingNotFoundException
from services.booking.domain.value_object import BookingId
from services.inventory.domain.value_object import RoomId
from services.shared.domain import UnauthorizedException, UserId

TODAY = date(2025, 6, 10)


class TestBookingQueryService:
    @pytest.fixture
    def service(self, booking_repository, create_booking):
        fixtures = [
            ("active", BookingStatus.CONFIRMED, date(2025, 6, 9), date(2025, 6, 12), 1),
            ("pending", BookingStatus.PENDING, date(2025, 7, 1), date(2025, 7, 3), 2),
            ("past", BookingStatus.CONFIRMED, date(2025, 6, 1), date(2025, 6, 3), 3),
            ("completed", BookingStatus.COMPLETED, date(2025, 5, 1), date(2025, 5, 3), 4),
            ("cancelled", BookingStatus.CANCELLED, date(2025, 6, 20), date(2025, 6, 21), 5),
        ]
        for booking_id, status, check_in, check_out, day in fixtures:
            booking_repository.save(
                create_booking(
                    booking_id=booking_id,
                    status=status,
                    check_in=check_in,
                    check_out=check_out,
                    booking_date=datetime(2025, 5, day, tzinfo=timezone.utc),
                )
            )
        booking_repository.save(
            create_booking(
                booking_id="someone-else",
                user_id="user-999",
                lines=[("room-2", 1, Decimal("5000"))],
            )
        )
        return BookingQueryService(repository=booking_repository)

    @pytest.mark.parametrize(
        "category, expected",
        [
            (BookingCategory.ACTIVE, ["active"]),
            (BookingCategory.PENDING, ["pending"]),
            (BookingCategory.PAST, ["completed", "past"]),
            (BookingCategory.CANCELLED, ["cancelled"]),
            (
                BookingCategory.ALL,
                ["cancelled", "completed", "past", "pending", "active"],
            ),
        ],
    )
    def test_list_user_bookings_by_category(
        self, service, requester, user_id, category, expected
    ):
        bookings = service.list_user_bookings(
            user_id, requester, category=category, today=TODAY
        )
        assert [str(b.id) for b in bookings] == expected

    def test_other_user_cannot_list(self, service, other_requester, user_id):
        with pytest.raises(UnauthorizedException):
            service.list_user_bookings(user_id, other_requester)

    def test_admin_can_list_any_user(self, service, admin):
        bookings = service.list_user_bookings(UserId(value="user-999"), admin)
        assert [str(b.id) for b in bookings] == ["someone-else"]

    def test_get_booking(self, service, requester):
        booking = service.get_booking(BookingId(value="active"), requester)
        assert booking.status == BookingStatus.CONFIRMED

    def test_get_booking_of_other_user(self, service, requester):
        with pytest.raises(UnauthorizedException):
            service.get_booking(BookingId(value="someone-else"), requester)

    def test_get_missing_booking(self, service, requester):
        with pytest.raises(BookingNotFoundException):
            service.get_booking(BookingId(value="missing"), requester)

    def test_admin_listings(self, service, admin, requester):
        assert len(service.list_all_bookings(admin)) == 6
        room_bookings = service.list_bookings_for_room(RoomId(value="room-2"), admin)
        assert [str(b.id) for b in room_bookings] == ["someone-else"]

        with pytest.raises(UnauthorizedException):
            service.list_all_bookings(requester)
        with pytest.raises(UnauthorizedException):
            service.list_bookings_for_room(RoomId(value="room-2"), requester)
