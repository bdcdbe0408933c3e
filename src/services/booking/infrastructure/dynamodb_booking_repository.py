import os
from datetime import date, datetime

import boto3
from boto3.dynamodb.conditions import Attr, Key
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from services.booking.domain.entity import Booking
from services.booking.domain.enum import BookingStatus
from services.booking.domain.repository import BookingRepository
from services.booking.domain.value_object import (
    BookingId,
    BookingLine,
    ReservedLine,
    StayPeriod,
)
from services.inventory.domain.value_object import RoomId
from services.shared.domain import Currency, Money, UserId
from services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    StorageFailureException,
)
from services.shared.utils import to_decimal

HEADER_SK = "META"
LINE_SK_PREFIX = "LINE#"
GSI1_NAME = "GSI1"


def _booking_pk(booking_id: BookingId | str) -> str:
    return f"BOOKING#{booking_id}"


def _line_sk(index: int) -> str:
    return f"{LINE_SK_PREFIX}{index:03d}"


def _is_condition_failure(error: ClientError) -> bool:
    """条件付き書き込み（トランザクション含む）の条件不一致かどうか"""
    code = error.response["Error"]["Code"]
    if code == "ConditionalCheckFailedException":
        return True
    if code != "TransactionCanceledException":
        return False
    reasons = error.response.get("CancellationReasons", [])
    return any(r.get("Code") == "ConditionalCheckFailed" for r in reasons)


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    予約ヘッダーと明細は同じパーティション（BOOKING#id）に格納する。
    明細は GSI1 (ROOM#id / CHECKIN#日付#予約ID) で客室ごとに引ける。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        self.client = boto3.client("dynamodb")
        self._serializer = TypeSerializer()

    def save(self, booking: Booking) -> None:
        """予約ヘッダーと全明細を単一トランザクションで保存する"""
        transact_items = [
            {
                "Put": {
                    "TableName": self.table_name,
                    "Item": self._serialize(self._to_header_item(booking)),
                    "ConditionExpression": "attribute_not_exists(PK)",
                }
            }
        ]
        for index, line in enumerate(booking.lines, start=1):
            transact_items.append(
                {
                    "Put": {
                        "TableName": self.table_name,
                        "Item": self._serialize(
                            self._to_line_item(booking, index, line)
                        ),
                    }
                }
            )

        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if _is_condition_failure(e):
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                ) from e
            raise StorageFailureException(f"Failed to save booking {booking.id}") from e
        except BotoCoreError as e:
            raise StorageFailureException(f"Failed to save booking {booking.id}") from e

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索（ヘッダーと明細を一度に取得する）"""
        items = self._query_all(
            {
                "KeyConditionExpression": Key("PK").eq(_booking_pk(booking_id)),
                "ConsistentRead": True,
            },
            f"Failed to load booking {booking_id}",
        )
        header = next((item for item in items if item["SK"] == HEADER_SK), None)
        if header is None:
            return None
        lines = [item for item in items if item["SK"].startswith(LINE_SK_PREFIX)]
        return self._to_entity(header, lines)

    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約のステータスを更新する"""
        kwargs: dict = {
            "Key": {"PK": _booking_pk(booking.id), "SK": HEADER_SK},
            "UpdateExpression": "SET #status = :status",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": {":status": booking.status.value},
        }

        if expected_status is not None:
            kwargs["ConditionExpression"] = Attr("status").eq(expected_status.value)
        else:
            kwargs["ConditionExpression"] = Attr("PK").exists()

        try:
            self.table.update_item(**kwargs)
        except ClientError as e:
            if _is_condition_failure(e):
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                ) from e
            raise StorageFailureException(
                f"Failed to update booking {booking.id}"
            ) from e
        except BotoCoreError as e:
            raise StorageFailureException(
                f"Failed to update booking {booking.id}"
            ) from e

    def delete(self, booking_id: BookingId) -> None:
        """PENDING の予約を明細ごと削除する"""
        items = self._query_all(
            {
                "KeyConditionExpression": Key("PK").eq(_booking_pk(booking_id)),
                "ProjectionExpression": "PK, SK",
                "ConsistentRead": True,
            },
            f"Failed to load booking {booking_id}",
        )
        transact_items: list[dict] = [
            {
                "Delete": {
                    "TableName": self.table_name,
                    "Key": self._serialize(
                        {"PK": _booking_pk(booking_id), "SK": HEADER_SK}
                    ),
                    "ConditionExpression": "#status = :pending",
                    "ExpressionAttributeNames": {"#status": "status"},
                    "ExpressionAttributeValues": self._serialize(
                        {":pending": BookingStatus.PENDING.value}
                    ),
                }
            }
        ]
        for item in items:
            if item["SK"] == HEADER_SK:
                continue
            transact_items.append(
                {
                    "Delete": {
                        "TableName": self.table_name,
                        "Key": self._serialize({"PK": item["PK"], "SK": item["SK"]}),
                    }
                }
            )

        try:
            self.client.transact_write_items(TransactItems=transact_items)
        except ClientError as e:
            if _is_condition_failure(e):
                raise OptimisticLockException(
                    f"Booking is no longer pending: {booking_id}"
                ) from e
            raise StorageFailureException(
                f"Failed to delete booking {booking_id}"
            ) from e
        except BotoCoreError as e:
            raise StorageFailureException(
                f"Failed to delete booking {booking_id}"
            ) from e

    def list_overlapping(
        self, room_id: RoomId, stay_period: StayPeriod
    ) -> list[ReservedLine]:
        """期間が重なる、キャンセル以外の予約明細を取得する

        チェックイン日 < 指定チェックアウト日 を GSI1 のソートキーで絞り、
        チェックアウト日 > 指定チェックイン日 をフィルターで絞る
        """
        items = self._query_all(
            {
                "IndexName": GSI1_NAME,
                "KeyConditionExpression": Key("GSI1PK").eq(f"ROOM#{room_id}")
                & Key("GSI1SK").lt(f"CHECKIN#{stay_period.check_out.isoformat()}"),
                "FilterExpression": Attr("check_out_date").gt(
                    stay_period.check_in.isoformat()
                ),
            },
            f"Failed to list bookings of room {room_id}",
        )

        statuses: dict[str, BookingStatus | None] = {}
        reserved: list[ReservedLine] = []
        for item in items:
            booking_id = item["booking_id"]
            if booking_id not in statuses:
                statuses[booking_id] = self._load_status(booking_id)
            status = statuses[booking_id]
            if status is None or not status.occupies_capacity:
                continue
            reserved.append(
                ReservedLine(
                    booking_id=BookingId(value=booking_id),
                    room_id=RoomId(value=item["room_id"]),
                    quantity=int(item["quantity"]),
                    stay_period=StayPeriod(
                        check_in=date.fromisoformat(item["check_in_date"]),
                        check_out=date.fromisoformat(item["check_out_date"]),
                    ),
                    status=status,
                )
            )
        return reserved

    def find_by_user_id(self, user_id: UserId) -> list[Booking]:
        """利用者の予約を予約日時の新しい順に取得する"""
        headers = self._query_all(
            {
                "IndexName": GSI1_NAME,
                "KeyConditionExpression": Key("GSI1PK").eq(f"USER#{user_id}")
                & Key("GSI1SK").begins_with("BOOKED#"),
                "ScanIndexForward": False,
            },
            f"Failed to list bookings of user {user_id}",
        )
        return self._load_bookings(item["booking_id"] for item in headers)

    def find_by_room_id(self, room_id: RoomId) -> list[Booking]:
        """客室を含む予約を予約日時の新しい順に取得する"""
        lines = self._query_all(
            {
                "IndexName": GSI1_NAME,
                "KeyConditionExpression": Key("GSI1PK").eq(f"ROOM#{room_id}")
                & Key("GSI1SK").begins_with("CHECKIN#"),
            },
            f"Failed to list bookings of room {room_id}",
        )
        return self._newest_first(
            self._load_bookings(item["booking_id"] for item in lines)
        )

    def find_by_status(self, status: BookingStatus) -> list[Booking]:
        """ステータスで予約を取得する"""
        return self._newest_first(
            self._scan_bookings(
                Attr("entity_type").eq("BOOKING") & Attr("status").eq(status.value)
            )
        )

    def find_all(self) -> list[Booking]:
        """全予約を予約日時の新しい順に取得する"""
        return self._newest_first(self._scan_bookings(Attr("entity_type").eq("BOOKING")))

    def _scan_bookings(self, filter_expression) -> list[Booking]:
        kwargs: dict = {
            "FilterExpression": filter_expression,
            "ProjectionExpression": "booking_id",
        }
        headers: list[dict] = []
        try:
            while True:
                response = self.table.scan(**kwargs)
                headers.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureException("Failed to scan bookings") from e
        return self._load_bookings(item["booking_id"] for item in headers)

    def _load_bookings(self, booking_ids) -> list[Booking]:
        """重複を除いて予約を読み込む（取得順を保つ）"""
        bookings: list[Booking] = []
        seen: set[str] = set()
        for booking_id in booking_ids:
            if booking_id in seen:
                continue
            seen.add(booking_id)
            booking = self.find_by_id(BookingId(value=booking_id))
            if booking is not None:
                bookings.append(booking)
        return bookings

    def _load_status(self, booking_id: str) -> BookingStatus | None:
        try:
            response = self.table.get_item(
                Key={"PK": _booking_pk(booking_id), "SK": HEADER_SK},
                ProjectionExpression="#status",
                ExpressionAttributeNames={"#status": "status"},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageFailureException(
                f"Failed to load booking status {booking_id}"
            ) from e
        item = response.get("Item")
        if not item:
            return None
        return BookingStatus(item["status"])

    def _query_all(self, kwargs: dict, error_message: str) -> list[dict]:
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
            raise StorageFailureException(error_message) from e

    def _serialize(self, item: dict) -> dict:
        return {k: self._serializer.serialize(v) for k, v in item.items()}

    @staticmethod
    def _newest_first(bookings: list[Booking]) -> list[Booking]:
        return sorted(bookings, key=lambda b: b.booking_date, reverse=True)

    def _to_header_item(self, booking: Booking) -> dict:
        booked_at = booking.booking_date.isoformat()
        return {
            "PK": _booking_pk(booking.id),
            "SK": HEADER_SK,
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "user_id": str(booking.user_id),
            "check_in_date": booking.stay_period.check_in.isoformat(),
            "check_out_date": booking.stay_period.check_out.isoformat(),
            "booking_date": booked_at,
            "status": booking.status.value,
            "GSI1PK": f"USER#{booking.user_id}",
            "GSI1SK": f"BOOKED#{booked_at}",
        }

    def _to_line_item(self, booking: Booking, index: int, line: BookingLine) -> dict:
        check_in = booking.stay_period.check_in.isoformat()
        return {
            "PK": _booking_pk(booking.id),
            "SK": _line_sk(index),
            "entity_type": "BOOKING_LINE",
            "booking_id": str(booking.id),
            "room_id": str(line.room_id),
            "quantity": line.quantity,
            "price_amount": str(line.price_per_night.amount),
            "price_currency": str(line.price_per_night.currency),
            "check_in_date": check_in,
            "check_out_date": booking.stay_period.check_out.isoformat(),
            "GSI1PK": f"ROOM#{line.room_id}",
            "GSI1SK": f"CHECKIN#{check_in}#{booking.id}",
        }

    def _to_entity(self, header: dict, lines: list[dict]) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        lines = sorted(lines, key=lambda item: item["SK"])
        return Booking(
            id=BookingId(value=header["booking_id"]),
            user_id=UserId(value=header["user_id"]),
            stay_period=StayPeriod(
                check_in=date.fromisoformat(header["check_in_date"]),
                check_out=date.fromisoformat(header["check_out_date"]),
            ),
            lines=[
                BookingLine(
                    room_id=RoomId(value=item["room_id"]),
                    quantity=int(item["quantity"]),
                    price_per_night=Money(
                        amount=to_decimal(item["price_amount"]),
                        currency=Currency(item["price_currency"]),
                    ),
                )
                for item in lines
            ],
            booking_date=datetime.fromisoformat(header["booking_date"]),
            status=BookingStatus(header["status"]),
        )
