class DomainException(Exception):
    """ドメイン層で発生する基底例外

    code は呼び出し側がメッセージ文字列に依存せず分岐するための識別子
    """

    code = "DOMAIN_ERROR"


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    code = "NOT_FOUND"


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    code = "BUSINESS_RULE_VIOLATION"


class DuplicateResourceException(DomainException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    code = "DUPLICATE"


class OptimisticLockException(DomainException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    code = "CONFLICT"


class UnauthorizedException(DomainException):
    """所有者でも管理者でもない利用者が操作しようとした場合"""

    code = "UNAUTHORIZED"


class StorageFailureException(DomainException):
    """永続化層のエラーをラップする例外"""

    code = "STORAGE_FAILURE"
