import json
import os
from datetime import datetime, timedelta, timezone

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

from services.booking.domain.value_object import BookingId
from services.payment.domain.exception import PaymentGatewayException
from services.payment.domain.gateway import PaymentGateway
from services.payment.domain.value_object import PaymentOrder
from services.shared.domain import Money

_BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}

_APPROVAL_RELS = ("approve", "payer-action")

_secret_cache: dict | None = None


def _get_credentials() -> dict:
    """Secrets Manager から PayPal のクライアント認証情報を取得する（コンテナ単位でキャッシュ）"""
    global _secret_cache
    if _secret_cache is None:
        client = boto3.client("secretsmanager")
        response = client.get_secret_value(SecretId=os.environ["PAYPAL_SECRET_ARN"])
        _secret_cache = json.loads(response["SecretString"])
    return _secret_cache


class TokenCache:
    """OAuth アクセストークンのキャッシュ"""

    def __init__(self) -> None:
        self._token: str | None = None
        self._expires_at: datetime | None = None

    def get(self) -> str | None:
        if self._token and self._expires_at:
            if datetime.now(timezone.utc) < self._expires_at - timedelta(seconds=60):
                return self._token
        return None

    def set(self, token: str, expires_in: int) -> None:
        self._token = token
        self._expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)


class PayPalPaymentGateway(PaymentGateway):
    """PayPal Orders v2 API を使用した PaymentGateway の具象実装"""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        mode: str | None = None,
        return_url: str | None = None,
        cancel_url: str | None = None,
        http: httpx.Client | None = None,
    ) -> None:
        mode = mode or os.getenv("PAYPAL_MODE", "sandbox")
        if mode not in _BASE_URLS:
            raise ValueError(f"Unsupported PayPal mode: {mode}")
        self._client_id = client_id
        self._client_secret = client_secret
        self._return_url = return_url or os.getenv("PAYMENT_RETURN_URL", "")
        self._cancel_url = cancel_url or os.getenv("PAYMENT_CANCEL_URL", "")
        self._token_cache = TokenCache()
        self.http = http or httpx.Client(
            base_url=_BASE_URLS[mode],
            timeout=httpx.Timeout(connect=5.0, read=20.0, write=5.0, pool=5.0),
        )

    def create_order(self, amount: Money, booking_id: BookingId) -> PaymentOrder:
        """支払い注文を作成し、承認用URLを返す"""
        body = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "reference_id": str(booking_id),
                    "amount": {
                        "currency_code": str(amount.currency),
                        "value": self._format_amount(amount),
                    },
                }
            ],
            "application_context": {
                "return_url": self._return_url.format(booking_id=booking_id),
                "cancel_url": self._cancel_url.format(booking_id=booking_id),
            },
        }
        data = self._request(
            "POST",
            "/v2/checkout/orders",
            body=body,
            headers={"Prefer": "return=representation"},
        )

        order_id = data.get("id")
        approval_url = next(
            (
                link.get("href")
                for link in data.get("links") or []
                if isinstance(link, dict) and link.get("rel") in _APPROVAL_RELS
            ),
            None,
        )
        if not order_id or not approval_url:
            raise PaymentGatewayException(
                "PayPal order response is missing the order id or approval link"
            )
        return PaymentOrder(order_id=order_id, approval_url=approval_url)

    def capture_order(self, order_id: str) -> bool:
        """注文を確定する。ステータスが COMPLETED の場合のみ入金済みとみなす"""
        data = self._request("POST", f"/v2/checkout/orders/{order_id}/capture", body={})
        return data.get("status") == "COMPLETED"

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict:
        request_headers = {"Authorization": f"Bearer {self._access_token()}"}
        if headers:
            request_headers.update(headers)
        try:
            response = self.http.request(method, path, json=body, headers=request_headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise PaymentGatewayException(
                f"PayPal returned {e.response.status_code} for {path}"
            ) from e
        except httpx.HTTPError as e:
            raise PaymentGatewayException(f"PayPal request failed for {path}: {e}") from e
        except ValueError as e:
            raise PaymentGatewayException(f"Invalid PayPal response for {path}") from e
        if not isinstance(data, dict):
            raise PaymentGatewayException(f"Unexpected PayPal response body for {path}")
        return data

    def _access_token(self) -> str:
        cached = self._token_cache.get()
        if cached:
            return cached

        client_id, client_secret = self._client_id, self._client_secret
        if not client_id or not client_secret:
            try:
                credentials = _get_credentials()
                client_id = credentials["client_id"]
                client_secret = credentials["client_secret"]
            except (ClientError, BotoCoreError, KeyError, ValueError) as e:
                raise PaymentGatewayException("PayPal credentials are unavailable") from e

        try:
            response = self.http.post(
                "/v1/oauth2/token",
                data={"grant_type": "client_credentials"},
                auth=(client_id, client_secret),
            )
            response.raise_for_status()
            payload = response.json()
            if not isinstance(payload, dict):
                raise PaymentGatewayException("Unexpected PayPal token response body")
            token = payload.get("access_token")
            expires_in = int(payload.get("expires_in", 300))
        except httpx.HTTPStatusError as e:
            raise PaymentGatewayException(
                f"PayPal authentication failed with {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise PaymentGatewayException(f"PayPal authentication failed: {e}") from e
        except (TypeError, ValueError) as e:
            raise PaymentGatewayException("Invalid PayPal token response") from e

        if not token:
            raise PaymentGatewayException("PayPal token response has no access_token")
        self._token_cache.set(token, expires_in)
        return token

    @staticmethod
    def _format_amount(amount: Money) -> str:
        rounded = amount.rounded()
        return f"{rounded.amount:.{rounded.currency.decimal_places}f}"
