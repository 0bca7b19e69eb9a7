"""Order placement: the commit command and its handler.

The handler validates every line against live inventory before it changes
anything. Stock is withdrawn and the order recorded only once the whole cart
has passed, so a rejected commit leaves the catalog exactly as it found it.
"""

import json

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.errors import InsufficientStock, InvalidOrder

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CommitOrder:
    user_id = String(max_length=100)
    customer_name = String(max_length=255)
    customer_email = String(max_length=255)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    payment_method = String(max_length=20)
    payment_status = String(max_length=20)
    payment_reference = String(max_length=255)
    shipping_address = Text()  # JSON: address dict
    notes = Text()


def _parse_lines(raw):
    try:
        lines = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError:
        raise InvalidOrder("Items must be a list of product lines") from None

    if not isinstance(lines, list) or not lines:
        raise InvalidOrder("Order must contain at least one item")
    if not all(isinstance(line, dict) for line in lines):
        raise InvalidOrder("Items must be a list of product lines")
    return lines


def _quantity_of(line):
    quantity = line.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidOrder(
            f"Quantity for product {line.get('product_id')} must be at least 1",
            field="quantity",
        )
    return quantity


@storefront.command_handler(part_of=Order)
class CommitOrderHandler:
    @handle(CommitOrder)
    def commit_order(self, command):
        lines = _parse_lines(command.items)
        product_repo = current_domain.repository_for(Product)

        products = {}
        requested = {}
        snapshots = []

        # Validate the whole cart first. Repeated lines for one product are
        # checked against their combined quantity.
        for line in lines:
            product_id = str(line.get("product_id") or "")
            if product_id not in products:
                products[product_id] = product_repo.get_product(product_id)
            product = products[product_id]

            quantity = _quantity_of(line)
            requested[product_id] = requested.get(product_id, 0) + quantity
            if not product.has_stock_for(requested[product_id]):
                raise InsufficientStock(
                    product_id=product_id,
                    product_name=product.name,
                    available=product.stock or 0,
                    requested=requested[product_id],
                )

            snapshots.append(
                {
                    "product_id": product_id,
                    "product_name": product.name,
                    "unit_price": product.price,
                    "quantity": quantity,
                    "image_url": product.image_url,
                }
            )

        order_repo = current_domain.repository_for(Order)
        order = Order.create(
            lines=snapshots,
            sequence=order_repo.next_sequence(),
            user_id=command.user_id,
            customer_name=command.customer_name,
            customer_email=command.customer_email,
            payment_method=command.payment_method,
            payment_status=command.payment_status,
            payment_reference=command.payment_reference,
            shipping_address=json.loads(command.shipping_address) if command.shipping_address else None,
            notes=command.notes,
        )

        for product_id, quantity in requested.items():
            products[product_id].withdraw(quantity)
            product_repo.add(products[product_id])
        order_repo.add(order)

        logger.info(
            "Order committed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=order.user_id,
            total_amount=order.total_amount,
            lines=len(snapshots),
        )
        return str(order.id)
