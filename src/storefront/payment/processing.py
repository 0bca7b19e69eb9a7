"""Payment capture against the active gateway.

A charge never touches inventory. It runs on a worker thread so the caller
can bound how long it waits; a gateway that does not answer in time counts
as a decline. A timed-out charge still waiting for a worker is cancelled, and
one already sent to the gateway is refunded if it succeeds late.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from enum import Enum

import structlog
from protean.exceptions import ValidationError

from storefront.payment.gateway import get_gateway
from storefront.shared.errors import PaymentDeclined
from storefront.shared.settings import payment_timeout_seconds

logger = structlog.get_logger(__name__)

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="payment")


class PaymentMethod(Enum):
    STRIPE = "stripe"
    PAYPAL = "paypal"
    COD = "cod"
    CREDIT_CARD = "credit_card"


@dataclass(frozen=True)
class PaymentReceipt:
    transaction_id: str
    amount: float
    method: str


def process_payment(amount: float, method: str, timeout: float | None = None) -> PaymentReceipt:
    """Charge ``amount`` through the gateway and return the receipt.

    Raises ``PaymentDeclined`` when the gateway refuses the charge or does not
    answer within ``timeout`` seconds.
    """
    if amount is None or amount <= 0:
        raise ValidationError({"amount": ["Payment amount must be greater than zero"]})
    if method not in {m.value for m in PaymentMethod}:
        raise ValidationError({"method": [f"Unsupported payment method '{method}'"]})

    timeout = payment_timeout_seconds() if timeout is None else timeout
    gateway = get_gateway()

    future = _executor.submit(gateway.charge, amount, method)
    try:
        result = future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning("Payment gateway timed out", amount=amount, method=method, timeout=timeout)
        if not future.cancel():
            # Already at the gateway: undo the charge if it lands after all
            future.add_done_callback(lambda f: _refund_late_charge(gateway, f))
        raise PaymentDeclined("Payment gateway timed out", amount=amount, method=method) from None

    if not result.success:
        logger.info("Payment declined", amount=amount, method=method, reason=result.failure_reason)
        raise PaymentDeclined(result.failure_reason or "Declined", amount=amount, method=method)

    logger.info("Payment captured", amount=amount, method=method, transaction_id=result.transaction_id)
    return PaymentReceipt(transaction_id=result.transaction_id, amount=amount, method=method)


def _refund_late_charge(gateway, future) -> None:
    """Refund a charge that succeeded after its caller was told it was declined."""
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.warning("Timed-out charge failed at the gateway", error=str(error))
        return

    result = future.result()
    if not result.success:
        return

    refund = gateway.refund(result.transaction_id, result.amount)
    if refund.success:
        logger.info(
            "Late charge refunded",
            transaction_id=result.transaction_id,
            refund_id=refund.refund_id,
            amount=result.amount,
        )
    else:
        logger.error(
            "Late charge could not be refunded",
            transaction_id=result.transaction_id,
            amount=result.amount,
            reason=refund.failure_reason,
        )
