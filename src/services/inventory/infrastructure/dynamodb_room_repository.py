import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from services.inventory.domain.entity import Room
from services.inventory.domain.repository import RoomRepository
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Currency, Money
from services.shared.domain.exception import StorageFailureException
from services.shared.utils import to_decimal


class DynamoDBRoomRepository(RoomRepository):
    """DynamoDBを使用したRoomRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def find_by_id(self, room_id: RoomId) -> Room | None:
        """客室IDで検索"""
        try:
            response = self.table.get_item(
                Key={"PK": f"ROOM#{room_id}", "SK": "META"},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureException(f"Failed to load room {room_id}") from e
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def delete(self, room_id: RoomId) -> None:
        """客室を削除する"""
        try:
            self.table.delete_item(Key={"PK": f"ROOM#{room_id}", "SK": "META"})
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureException(f"Failed to delete room {room_id}") from e

    def _to_entity(self, item: dict) -> Room:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Room(
            id=RoomId(value=item["room_id"]),
            room_type=item["room_type"],
            price=Money(
                amount=to_decimal(item["price_amount"]),
                currency=Currency(item["price_currency"]),
            ),
            total_units=int(item["total_units"]),
        )
