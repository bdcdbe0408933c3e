from pydantic import BaseModel, Field


class CapturePaymentRequest(BaseModel):
    """決済確定リクエストモデル（承認後のリダイレクトで受け取った注文ID）"""

    order_id: str = Field(..., min_length=1)
