"""Contract between payment processing and whatever captures the money.

Only ``process_payment`` talks to a gateway. Adapters report outcomes as
values; deciding that a refusal is a ``PaymentDeclined`` is left to the caller.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    success: bool
    amount: float
    method: str
    transaction_id: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    success: bool
    transaction_id: str
    refund_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    @abstractmethod
    def charge(self, amount: float, method: str) -> ChargeResult:
        """Capture ``amount`` with ``method``. May block for a network round trip."""

    @abstractmethod
    def refund(self, transaction_id: str, amount: float) -> RefundResult:
        """Give back a captured charge, e.g. after a commit failed post-capture."""
