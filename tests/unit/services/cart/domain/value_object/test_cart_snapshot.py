from datetime import date

import pytest

from services.cart.domain.value_object import CartLine
from services.inventory.domain.value_object import RoomId

JUNE_1 = date(2025, 6, 1)
JUNE_3 = date(2025, 6, 3)


class TestCartLine:
    def test_zero_quantity(self):
        with pytest.raises(ValueError):
            CartLine(room_id=RoomId(value="room-1"), quantity=0, check_in=JUNE_1, check_out=JUNE_3)


class TestCartSnapshot:
    def test_empty(self, create_cart):
        assert create_cart(lines=[]).is_empty

    def test_consistent_dates(self, create_cart):
        cart = create_cart(
            lines=[("room-1", 1, JUNE_1, JUNE_3), ("room-2", 2, JUNE_1, JUNE_3)]
        )
        assert cart.has_consistent_dates()

    def test_inconsistent_dates(self, create_cart):
        cart = create_cart(
            lines=[("room-1", 1, JUNE_1, JUNE_3), ("room-2", 2, JUNE_1, date(2025, 6, 4))]
        )
        assert not cart.has_consistent_dates()

    def test_line_order_is_kept(self, create_cart):
        cart = create_cart(
            lines=[("room-2", 1, JUNE_1, JUNE_3), ("room-1", 1, JUNE_1, JUNE_3)]
        )
        assert [str(line.room_id) for line in cart.lines] == ["room-2", "room-1"]
