"""Simulated payment gateway.

Sleeps for a configurable latency to mimic a network round trip, then
succeeds or declines depending on how it was configured. Nothing leaves the
process.
"""

import time
from uuid import uuid4

from storefront.payment.gateway.port import ChargeResult, PaymentGateway, RefundResult
from storefront.shared.settings import payment_latency_seconds


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, latency: float | None = None) -> None:
        self.latency: float = payment_latency_seconds() if latency is None else latency
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Card declined",
        latency: float | None = None,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        if latency is not None:
            self.latency = latency

    def charge(self, amount: float, method: str) -> ChargeResult:
        self.calls.append({"method": "charge", "amount": amount, "payment_method": method})

        if self.latency:
            time.sleep(self.latency)

        if self.should_succeed:
            return ChargeResult(success=True, amount=amount, method=method, transaction_id=f"txn_{uuid4().hex[:12]}")
        return ChargeResult(success=False, amount=amount, method=method, failure_reason=self.failure_reason)

    def refund(self, transaction_id: str, amount: float) -> RefundResult:
        self.calls.append({"method": "refund", "transaction_id": transaction_id, "amount": amount})
        return RefundResult(success=True, transaction_id=transaction_id, refund_id=f"re_{uuid4().hex[:12]}")
