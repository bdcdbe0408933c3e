from .payment_order import PaymentOrder as PaymentOrder
