import json
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from services.booking.applications.checkout_cart import CheckoutResult
from services.booking.domain.enum import BookingStatus
from services.booking.domain.exception import (
    BookingNotFoundException,
    InvalidStatusTransitionException,
    MixedCurrencyException,
    RoomUnavailableException,
)
from services.shared.domain import Requester, UserId


def _body(response: dict) -> dict:
    return json.loads(response["body"])


class TestCheckoutHandler:
    @pytest.fixture
    def handler(self, load_handler, monkeypatch):
        module = load_handler("services.booking.handlers.checkout")
        service = MagicMock()
        monkeypatch.setattr(module, "service", service)
        return module, service

    def test_created(self, handler, api_event, lambda_context, create_booking):
        module, service = handler
        service.checkout.return_value = CheckoutResult(
            booking=create_booking(), cart_cleared=True
        )

        response = module.lambda_handler(api_event(), lambda_context)

        assert response["statusCode"] == 201
        data = _body(response)["data"]
        assert data["booking_id"] == "booking-1"
        assert data["status"] == "PENDING"
        assert data["lines"][0]["room_id"] == "room-1"
        service.checkout.assert_called_once_with(
            Requester(user_id=UserId(value="user-123"))
        )

    def test_unavailable_room(self, handler, api_event, lambda_context):
        module, service = handler
        service.checkout.side_effect = RoomUnavailableException("room-1", 2)

        response = module.lambda_handler(api_event(), lambda_context)

        assert response["statusCode"] == 409
        assert _body(response)["error"] == "ROOM_UNAVAILABLE"

    def test_mixed_currency_cart(self, handler, api_event, lambda_context):
        module, service = handler
        service.checkout.side_effect = MixedCurrencyException(["JPY", "USD"])

        response = module.lambda_handler(api_event(), lambda_context)

        assert response["statusCode"] == 400
        assert _body(response)["error"] == "MIXED_CURRENCY"

    def test_missing_identity(self, handler, api_event, lambda_context):
        module, service = handler

        response = module.lambda_handler(api_event(sub=None), lambda_context)

        assert response["statusCode"] == 403
        service.checkout.assert_not_called()

    def test_unexpected_error(self, handler, api_event, lambda_context):
        module, service = handler
        service.checkout.side_effect = RuntimeError("boom")

        response = module.lambda_handler(api_event(), lambda_context)

        assert response["statusCode"] == 500
        assert "boom" not in response["body"]


class TestCancelHandler:
    @pytest.fixture
    def handler(self, load_handler, monkeypatch):
        module = load_handler("services.booking.handlers.cancel")
        service = MagicMock()
        monkeypatch.setattr(module, "service", service)
        return module, service

    def test_cancelled(self, handler, api_event, lambda_context, create_booking):
        module, service = handler
        booking = create_booking(status=BookingStatus.CONFIRMED)
        booking.cancel()
        service.cancel.return_value = booking

        response = module.lambda_handler(
            api_event(path_parameters={"booking_id": "booking-1"}), lambda_context
        )

        assert response["statusCode"] == 200
        assert _body(response)["data"]["status"] == "CANCELLED"
        assert booking.domain_events == ()

    def test_completed_booking(self, handler, api_event, lambda_context):
        module, service = handler
        service.cancel.side_effect = InvalidStatusTransitionException(
            BookingStatus.COMPLETED, "cancel"
        )

        response = module.lambda_handler(
            api_event(path_parameters={"booking_id": "booking-1"}), lambda_context
        )

        assert response["statusCode"] == 409
        assert _body(response)["error"] == "INVALID_STATUS_TRANSITION"

    def test_missing_path_parameter(self, handler, api_event, lambda_context):
        module, _ = handler
        response = module.lambda_handler(api_event(), lambda_context)
        assert response["statusCode"] == 400


class TestGetBookingHandler:
    def test_not_found(self, load_handler, monkeypatch, api_event, lambda_context):
        module = load_handler("services.booking.handlers.get_booking")
        service = MagicMock()
        service.get_booking.side_effect = BookingNotFoundException("missing")
        monkeypatch.setattr(module, "service", service)

        response = module.lambda_handler(
            api_event(path_parameters={"booking_id": "missing"}), lambda_context
        )

        assert response["statusCode"] == 404
        assert _body(response)["error"] == "BOOKING_NOT_FOUND"


class TestListBookingsHandler:
    @pytest.fixture
    def handler(self, load_handler, monkeypatch):
        module = load_handler("services.booking.handlers.list_bookings")
        service = MagicMock()
        service.list_user_bookings.return_value = []
        service.list_all_bookings.return_value = []
        monkeypatch.setattr(module, "service", service)
        return module, service

    def test_lists_own_bookings_by_category(
        self, handler, api_event, lambda_context, create_booking
    ):
        module, service = handler
        service.list_user_bookings.return_value = [create_booking()]

        response = module.lambda_handler(
            api_event(query={"category": "PENDING"}), lambda_context
        )

        assert response["statusCode"] == 200
        assert _body(response)["count"] == 1
        args, kwargs = service.list_user_bookings.call_args
        assert args[0] == UserId(value="user-123")
        assert kwargs["category"].value == "PENDING"

    def test_admin_scope_all(self, handler, api_event, lambda_context):
        module, service = handler

        module.lambda_handler(
            api_event(query={"scope": "all"}, sub="admin-1", groups="admin"),
            lambda_context,
        )

        service.list_all_bookings.assert_called_once()

    def test_unknown_category(self, handler, api_event, lambda_context):
        module, service = handler

        response = module.lambda_handler(
            api_event(query={"category": "SOMEDAY"}), lambda_context
        )

        assert response["statusCode"] == 400
        assert _body(response)["error"] == "VALIDATION_ERROR"
        service.list_user_bookings.assert_not_called()


class TestAvailabilityHandler:
    @pytest.fixture
    def handler(self, load_handler, monkeypatch, room_repository, booking_repository, create_room):
        from services.booking.domain.service import AvailabilityChecker

        module = load_handler("services.booking.handlers.availability")
        room_repository.add(create_room(room_id="room-1", total_units=2))
        monkeypatch.setattr(module, "room_repository", room_repository)
        monkeypatch.setattr(
            module,
            "checker",
            AvailabilityChecker(
                room_repository=room_repository, booking_repository=booking_repository
            ),
        )
        return module

    def test_available(self, handler, api_event, lambda_context):
        response = handler.lambda_handler(
            api_event(
                path_parameters={"room_id": "room-1"},
                query={"check_in": "2025-06-01", "check_out": "2025-06-03", "quantity": "2"},
            ),
            lambda_context,
        )

        assert response["statusCode"] == 200
        data = _body(response)["data"]
        assert data["available"] is True
        assert data["available_units"] == 2

    def test_reversed_range_is_unavailable(self, handler, api_event, lambda_context):
        response = handler.lambda_handler(
            api_event(
                path_parameters={"room_id": "room-1"},
                query={"check_in": "2025-06-03", "check_out": "2025-06-01"},
            ),
            lambda_context,
        )

        assert response["statusCode"] == 200
        data = _body(response)["data"]
        assert data["available"] is False
        assert data["available_units"] == 0

    def test_fully_booked(
        self, handler, api_event, lambda_context, booking_repository, create_booking
    ):
        booking_repository.save(create_booking(lines=[("room-1", 2, Decimal("12000"))]))

        response = handler.lambda_handler(
            api_event(
                path_parameters={"room_id": "room-1"},
                query={"check_in": "2025-06-02", "check_out": "2025-06-04"},
            ),
            lambda_context,
        )

        data = _body(response)["data"]
        assert data["available"] is False
        assert data["available_units"] == 0

    def test_malformed_date(self, handler, api_event, lambda_context):
        response = handler.lambda_handler(
            api_event(
                path_parameters={"room_id": "room-1"},
                query={"check_in": "next week", "check_out": "2025-06-01"},
            ),
            lambda_context,
        )
        assert response["statusCode"] == 400

    def test_unknown_room(self, handler, api_event, lambda_context):
        response = handler.lambda_handler(
            api_event(
                path_parameters={"room_id": "missing"},
                query={"check_in": "2025-06-01", "check_out": "2025-06-03"},
            ),
            lambda_context,
        )
        assert response["statusCode"] == 404


class TestCompleteHandler:
    def test_completes_due_bookings_as_of_event_time(
        self, load_handler, monkeypatch, lambda_context, create_booking
    ):
        module = load_handler("services.booking.handlers.complete")
        service = MagicMock()
        service.complete_due.return_value = [create_booking(status=BookingStatus.COMPLETED)]
        monkeypatch.setattr(module, "service", service)
        event = {
            "version": "0",
            "id": "event-1",
            "detail-type": "Scheduled Event",
            "source": "aws.events",
            "account": "123456789012",
            "time": "2025-06-03T00:15:00Z",
            "region": "ap-northeast-1",
            "resources": [],
            "detail": {},
        }

        result = module.lambda_handler(event, lambda_context)

        assert service.complete_due.call_args.args == (date(2025, 6, 3),)
        assert service.complete_due.call_args.kwargs["on_skipped"] is module._log_skipped
        assert result["completed"] == ["booking-1"]
