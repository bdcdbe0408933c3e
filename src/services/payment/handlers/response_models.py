from pydantic import BaseModel


class PaymentOrderData(BaseModel):
    """支払い注文のレスポンスモデル"""

    booking_id: str
    order_id: str
    approval_url: str


class CaptureData(BaseModel):
    """決済確定結果のレスポンスモデル"""

    booking_id: str
    order_id: str
    outcome: str
    booking_status: str


class PaymentOrderResponse(BaseModel):
    status: str = "success"
    data: PaymentOrderData


class CaptureResponse(BaseModel):
    status: str = "success"
    data: CaptureData
