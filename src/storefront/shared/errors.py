"""Error kinds raised by the catalog and the order ledger.

Each kind extends the protean exception the HTTP layer already knows how to
map: rejected input is a ``ValidationError`` (400), an unknown identifier is an
``ObjectNotFoundError`` (404). A declined payment is an
``InvalidOperationError`` with its own 402 mapping.

None of these are fatal. When ``commit_order`` raises, nothing was written.
"""

from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError


class InvalidOrder(ValidationError):
    """The candidate order is malformed: no items, or a non-positive quantity."""

    def __init__(self, reason: str, field: str = "items") -> None:
        self.reason = reason
        super().__init__({field: [reason]})


class InsufficientStock(ValidationError):
    """A line asks for more units than the catalog currently holds."""

    def __init__(self, product_id: str, product_name: str, available: int, requested: int) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__({"stock": [f"Insufficient stock for {product_name}. Available: {available}"]})


class ProductNotFound(ObjectNotFoundError):
    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__({"_entity": f"Product {product_id} no longer exists"})


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__({"_entity": f"Order {order_id} not found"})


class AccountNotFound(ObjectNotFoundError):
    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__({"_entity": f"Account {account_id} not found"})


class PaymentDeclined(InvalidOperationError):
    """The gateway refused the charge, or did not answer in time."""

    def __init__(self, reason: str, amount: float | None = None, method: str | None = None) -> None:
        self.reason = reason
        self.amount = amount
        self.method = method
        super().__init__(f"Payment declined: {reason}")
