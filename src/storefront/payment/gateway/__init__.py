"""Process-wide payment gateway.

The simulated gateway is created on first use with the configured latency.
Tests install their own with ``set_gateway()`` and drop it with
``reset_gateway()``.
"""

import threading

from storefront.payment.gateway.fake_adapter import FakeGateway
from storefront.payment.gateway.port import ChargeResult, PaymentGateway, RefundResult

_lock = threading.Lock()
_active: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    global _active
    with _lock:
        if _active is None:
            _active = FakeGateway()
        return _active


def set_gateway(gateway: PaymentGateway) -> None:
    global _active
    with _lock:
        _active = gateway


def reset_gateway() -> None:
    set_gateway(None)


__all__ = ["ChargeResult", "FakeGateway", "PaymentGateway", "RefundResult", "get_gateway", "reset_gateway", "set_gateway"]
