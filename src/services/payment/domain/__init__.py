from .enum import CaptureOutcome as CaptureOutcome
from .exception import CaptureFailedException as CaptureFailedException
from .exception import (
    ConfirmedPaymentUnrecordedException as ConfirmedPaymentUnrecordedException,
)
from .exception import PaymentGatewayException as PaymentGatewayException
from .gateway import PaymentGateway as PaymentGateway
from .value_object import PaymentOrder as PaymentOrder
