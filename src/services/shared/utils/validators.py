from decimal import Decimal


def to_decimal(v: object) -> Decimal:
    """DynamoDB から読み出した数値・文字列を Decimal に変換する

    金額は文字列で保存しているため float を経由させない。
    """
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))
