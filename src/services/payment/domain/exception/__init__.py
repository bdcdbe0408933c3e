from .payment_exceptions import CaptureFailedException as CaptureFailedException
from .payment_exceptions import (
    ConfirmedPaymentUnrecordedException as ConfirmedPaymentUnrecordedException,
)
from .payment_exceptions import PaymentGatewayException as PaymentGatewayException
