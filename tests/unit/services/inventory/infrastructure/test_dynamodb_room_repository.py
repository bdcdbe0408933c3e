from decimal import Decimal
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from services.inventory.domain.value_object import RoomId
from services.inventory.infrastructure.dynamodb_room_repository import (
    DynamoDBRoomRepository,
)
from services.shared.domain import Money
from services.shared.domain.exception import StorageFailureException

ROOM_ITEM = {
    "PK": "ROOM#room-1",
    "SK": "META",
    "entity_type": "ROOM",
    "room_id": "room-1",
    "room_type": "Deluxe Twin",
    "price_amount": Decimal("12000"),
    "price_currency": "JPY",
    "total_units": Decimal("3"),
}


@pytest.fixture
def table():
    with patch(
        "services.inventory.infrastructure.dynamodb_room_repository.boto3"
    ) as mock_boto3:
        yield mock_boto3.resource.return_value.Table.return_value


class TestDynamoDBRoomRepository:
    def test_find_by_id(self, table):
        table.get_item.return_value = {"Item": ROOM_ITEM}
        repository = DynamoDBRoomRepository(table_name="test-table")

        room = repository.find_by_id(RoomId(value="room-1"))

        assert room.total_units == 3
        assert room.price == Money.jpy(Decimal("12000"))
        table.get_item.assert_called_once_with(
            Key={"PK": "ROOM#room-1", "SK": "META"}, ConsistentRead=True
        )

    def test_find_missing(self, table):
        table.get_item.return_value = {}
        repository = DynamoDBRoomRepository(table_name="test-table")

        assert repository.find_by_id(RoomId(value="missing")) is None

    def test_read_failure(self, table):
        table.get_item.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": ""}},
            "GetItem",
        )
        repository = DynamoDBRoomRepository(table_name="test-table")

        with pytest.raises(StorageFailureException):
            repository.find_by_id(RoomId(value="room-1"))

    def test_delete(self, table):
        repository = DynamoDBRoomRepository(table_name="test-table")

        repository.delete(RoomId(value="room-1"))

        table.delete_item.assert_called_once_with(Key={"PK": "ROOM#room-1", "SK": "META"})
