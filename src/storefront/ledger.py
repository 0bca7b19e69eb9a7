"""Order Ledger Service: the entry point callers use to read and change the store.

Reads go straight to the repositories. Every write is dispatched as a command
while holding one process-wide lock, so the read, validate and persist steps
of a commit cannot interleave with another write. Two carts racing for the
last units of a product therefore cannot both pass the stock check.

Payment capture happens outside the lock. A checkout charges first and
commits only when the charge succeeded.
"""

import json
import threading
from collections.abc import Mapping

import structlog
from protean.utils.globals import current_domain

from storefront.account.account import Account
from storefront.account.management import ChangeAccountRole, RegisterAccount, ToggleAccountStatus
from storefront.catalog.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalog.product import Product
from storefront.order.order import Order, PaymentStatus
from storefront.order.placement import CommitOrder
from storefront.order.status import UpdateOrderStatus
from storefront.payment.processing import PaymentMethod, PaymentReceipt, process_payment
from storefront.shared.errors import InsufficientStock, InvalidOrder

logger = structlog.get_logger(__name__)

_write_lock = threading.RLock()


def _dispatch(command):
    with _write_lock:
        return current_domain.process(command, asynchronous=False)


def _cart_lines(items) -> list:
    if not items:
        raise InvalidOrder("Order must contain at least one item")
    if isinstance(items, (str, bytes, Mapping)) or not all(isinstance(i, Mapping) for i in items):
        raise InvalidOrder("Items must be a list of product lines")
    return list(items)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
def list_products() -> list[Product]:
    """Every product in creation order. Has no side effects."""
    return current_domain.repository_for(Product).list_in_order()


def get_product(product_id) -> Product:
    return current_domain.repository_for(Product).get_product(product_id)


def create_product(name, price, stock=0, **details) -> Product:
    product_id = _dispatch(CreateProduct(name=name, price=price, stock=stock, **details))
    return get_product(product_id)


def update_product(product_id, **changes) -> Product:
    _dispatch(UpdateProduct(product_id=product_id, **changes))
    return get_product(product_id)


def delete_product(product_id) -> None:
    _dispatch(DeleteProduct(product_id=product_id))


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
def commit_order(
    items,
    user_id=None,
    customer_name=None,
    customer_email=None,
    payment_method=None,
    payment: PaymentReceipt | None = None,
    shipping_address=None,
    notes=None,
) -> Order:
    """Validate a cart against live stock, withdraw it and record the order.

    ``items`` is a sequence of ``{"product_id", "quantity"}`` mappings. Totals,
    identifiers, timestamps and statuses are always computed here; passing a
    completed ``payment`` receipt is the only way to commit a paid order.

    Raises ``InvalidOrder``, ``ProductNotFound`` or ``InsufficientStock``.
    Nothing is written when it raises.
    """
    items = _cart_lines(items)

    command = CommitOrder(
        user_id=user_id,
        customer_name=customer_name,
        customer_email=customer_email,
        items=json.dumps([{"product_id": i.get("product_id"), "quantity": i.get("quantity")} for i in items]),
        payment_method=payment.method if payment else payment_method,
        payment_status=PaymentStatus.PAID.value if payment else PaymentStatus.UNPAID.value,
        payment_reference=payment.transaction_id if payment else None,
        shipping_address=json.dumps(shipping_address) if shipping_address else None,
        notes=notes,
    )
    order_id = _dispatch(command)
    return get_order(order_id)


def update_order_status(order_id, status) -> Order:
    """Move an order to any status. Stock and payment status are left alone."""
    _dispatch(UpdateOrderStatus(order_id=order_id, status=status))
    return get_order(order_id)


def list_orders(user_id=None) -> list[Order]:
    """Orders, most recent first. Optionally only those placed by ``user_id``."""
    return current_domain.repository_for(Order).list_recent(user_id=user_id)


def get_order(order_id) -> Order:
    return current_domain.repository_for(Order).get_order(order_id)


def quote(items) -> float:
    """Price a cart at current catalog prices without touching stock.

    Runs the same per-line checks as a commit so a checkout does not charge
    for a cart that would be rejected.
    """
    items = _cart_lines(items)

    repo = current_domain.repository_for(Product)
    requested = {}
    total = 0.0
    for item in items:
        product = repo.get_product(item.get("product_id"))
        quantity = item.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidOrder(f"Quantity for product {item.get('product_id')} must be at least 1", field="quantity")

        requested[product.id] = requested.get(product.id, 0) + quantity
        if not product.has_stock_for(requested[product.id]):
            raise InsufficientStock(
                product_id=str(product.id),
                product_name=product.name,
                available=product.stock or 0,
                requested=requested[product.id],
            )
        total += product.price * quantity
    return round(total, 2)


def checkout(
    items,
    payment_method=PaymentMethod.STRIPE.value,
    user_id=None,
    customer_name=None,
    customer_email=None,
    shipping_address=None,
    notes=None,
    timeout=None,
) -> Order:
    """Charge for a cart, then commit it as a paid order.

    Cash on delivery skips the charge and commits an unpaid order. A declined
    or timed-out charge raises ``PaymentDeclined`` and nothing is committed.
    If the charge succeeds but the commit is then rejected, the commit error
    is raised with ``payment_reference`` set so the charge can be refunded.
    """
    amount = quote(items)
    order_fields = dict(
        user_id=user_id,
        customer_name=customer_name,
        customer_email=customer_email,
        shipping_address=shipping_address,
        notes=notes,
    )

    if payment_method == PaymentMethod.COD.value:
        return commit_order(items, payment_method=payment_method, **order_fields)

    receipt = process_payment(amount, payment_method, timeout=timeout)
    try:
        return commit_order(items, payment=receipt, **order_fields)
    except Exception as exc:
        logger.error(
            "Commit failed after payment was captured",
            payment_reference=receipt.transaction_id,
            amount=receipt.amount,
            error=str(exc),
        )
        exc.payment_reference = receipt.transaction_id
        raise


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
def register_account(name, email, role=None) -> Account:
    account_id = _dispatch(RegisterAccount(name=name, email=email, role=role))
    return current_domain.repository_for(Account).get_account(account_id)


def toggle_account_status(account_id) -> Account:
    _dispatch(ToggleAccountStatus(account_id=account_id))
    return current_domain.repository_for(Account).get_account(account_id)


def change_account_role(account_id, role) -> Account:
    _dispatch(ChangeAccountRole(account_id=account_id, role=role))
    return current_domain.repository_for(Account).get_account(account_id)


def list_accounts(role=None) -> list[Account]:
    return current_domain.repository_for(Account).list_all(role=role)


__all__ = [
    "change_account_role",
    "checkout",
    "commit_order",
    "create_product",
    "delete_product",
    "get_order",
    "get_product",
    "list_accounts",
    "list_orders",
    "list_products",
    "process_payment",
    "quote",
    "register_account",
    "toggle_account_status",
    "update_order_status",
    "update_product",
]
