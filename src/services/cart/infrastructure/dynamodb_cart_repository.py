import os
from datetime import date

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from services.cart.domain.repository import CartRepository
from services.cart.domain.value_object import CartLine, CartSnapshot
from services.inventory.domain.value_object import RoomId
from services.shared.domain import UserId
from services.shared.domain.exception import StorageFailureException


class DynamoDBCartRepository(CartRepository):
    """DynamoDBを使用したCartRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def get_snapshot(self, user_id: UserId) -> CartSnapshot:
        """カート明細を追加順に取得する"""
        items = self._query_lines(user_id)
        items.sort(key=lambda item: item.get("added_at", ""))
        return CartSnapshot(
            user_id=user_id,
            lines=tuple(self._to_line(item) for item in items),
        )

    def clear(self, user_id: UserId) -> None:
        """カート明細をすべて削除する"""
        items = self._query_lines(user_id)
        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    batch.delete_item(Key={"PK": item["PK"], "SK": item["SK"]})
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureException(f"Failed to clear cart of {user_id}") from e

    def _query_lines(self, user_id: UserId) -> list[dict]:
        kwargs: dict = {
            "KeyConditionExpression": Key("PK").eq(f"CART#{user_id}")
            & Key("SK").begins_with("LINE#"),
            "ConsistentRead": True,
        }
        items: list[dict] = []
        try:
            while True:
                response = self.table.query(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureException(f"Failed to load cart of {user_id}") from e

    def _to_line(self, item: dict) -> CartLine:
        """DynamoDB アイテムをカート明細に変換する"""
        return CartLine(
            room_id=RoomId(value=item["room_id"]),
            quantity=int(item["quantity"]),
            check_in=date.fromisoformat(item["check_in_date"]),
            check_out=date.fromisoformat(item["check_out_date"]),
        )
