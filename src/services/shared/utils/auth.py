from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from services.shared.domain import Requester, UnauthorizedException, UserId

ADMIN_GROUP = "admin"


def _parse_groups(raw: object) -> set[str]:
    """cognito:groups クレームを集合に変換する

    REST API の Cognito オーソライザーは "a,b" や "[a b]" の文字列で渡してくる
    """
    if raw is None:
        return set()
    if isinstance(raw, list):
        return {str(g) for g in raw}
    text = str(raw).strip("[]")
    return {g for g in text.replace(",", " ").split() if g}


def requester_from_event(event: APIGatewayProxyEvent) -> Requester:
    """オーソライザーのクレームから操作者を取り出す"""
    claims = event.request_context.authorizer.claims or {}
    subject = claims.get("sub")
    if not subject:
        raise UnauthorizedException("Missing authenticated subject")
    groups = _parse_groups(claims.get("cognito:groups"))
    return Requester(user_id=UserId(subject), is_admin=ADMIN_GROUP in groups)
