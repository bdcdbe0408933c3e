import json

from pydantic import ValidationError

from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    ResourceNotFoundException,
)

_STATUS_BY_CODE: dict[str, int] = {
    "EMPTY_CART": 400,
    "INCONSISTENT_DATES": 400,
    "INVALID_DATE_RANGE": 400,
    "ROOM_UNAVAILABLE": 409,
    "MIXED_CURRENCY": 400,
    "INVALID_STATUS_TRANSITION": 409,
    "ROOM_IN_USE": 409,
    "UNAUTHORIZED": 403,
    "CAPTURE_FAILED": 402,
    "CONFIRMED_PAYMENT_UNRECORDED": 500,
    "PAYMENT_GATEWAY_ERROR": 502,
    "STORAGE_FAILURE": 503,
    "CONFLICT": 409,
    "DUPLICATE": 409,
}


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway Lambda Proxy Integration のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def status_code_for(error: DomainException) -> int:
    """ドメイン例外を HTTP ステータスコードに対応付ける"""
    if error.code in _STATUS_BY_CODE:
        return _STATUS_BY_CODE[error.code]
    if isinstance(error, ResourceNotFoundException):
        return 404
    if isinstance(error, BusinessRuleViolationException):
        return 400
    return 500


def error_response(error: DomainException) -> dict:
    """ドメイン例外をエラーレスポンスに変換する"""
    return api_response(
        status_code_for(error),
        {"error": error.code, "message": str(error)},
    )


def validation_error_response(error: ValidationError) -> dict:
    """リクエストの検証エラーを 400 レスポンスに変換する"""
    return api_response(
        400,
        {
            "error": "VALIDATION_ERROR",
            "message": "Invalid request",
            "details": error.errors(include_url=False),
        },
    )


def internal_error_response() -> dict:
    return api_response(500, {"error": "INTERNAL_ERROR", "message": "Internal server error"})
