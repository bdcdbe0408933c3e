from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentOrder:
    """外部決済サービスで作成した注文

    approval_url は利用者が支払いを承認するためのリダイレクト先
    """

    order_id: str
    approval_url: str

    def __post_init__(self) -> None:
        if not self.order_id:
            raise ValueError("order_id cannot be empty")
