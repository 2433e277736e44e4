# petcare/core/payments/__init__.py
from petcare.core.payments.gateway import PaymentGateway, PaymentResult, YooKassaGateway

__all__ = ["PaymentGateway", "PaymentResult", "YooKassaGateway"]
