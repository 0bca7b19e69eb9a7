"""Order aggregate: an immutable record of a committed cart.

Items and the total are fixed at commit time from catalog snapshots. The
fulfilment ``status`` may move freely between any two values; there is no
transition graph, and moving to Cancelled or Refunded does not put stock back.
"""

import json
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import OrderCommitted, OrderStatusChanged
from storefront.payment.processing import PaymentMethod

GUEST_USER_ID = "guest"
GUEST_CUSTOMER_NAME = "Guest Customer"


class OrderStatus(Enum):
    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    PROCESSING = "processing"
    PACKING = "packing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes, as captured at checkout."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip = String(max_length=20)
    country = String(required=True, max_length=100)


@storefront.entity(part_of="Order")
class OrderItem:
    """One line of an order with the product name and price as they were at commit."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=500)

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


@storefront.aggregate
class Order:
    order_number = String(max_length=30)
    sequence = Integer(default=0)
    user_id = String(max_length=100, default=GUEST_USER_ID)
    customer_name = String(max_length=255, default=GUEST_CUSTOMER_NAME)
    customer_email = String(max_length=255)
    items = HasMany(OrderItem)
    total_amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.UNPAID.value)
    payment_method = String(choices=PaymentMethod)
    payment_reference = String(max_length=255)
    shipping_address = ValueObject(ShippingAddress)
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        lines,
        sequence,
        user_id=None,
        customer_name=None,
        customer_email=None,
        payment_method=None,
        payment_status=None,
        payment_reference=None,
        shipping_address=None,
        notes=None,
    ):
        """Build a committed order from validated line snapshots.

        Args:
            lines: List of dicts with product_id, product_name, unit_price,
                quantity and optionally image_url, in cart order.
            sequence: Position of this order in the ledger; newer orders
                carry higher numbers.
        """
        payment_status = payment_status or PaymentStatus.UNPAID.value
        if payment_status == PaymentStatus.PAID.value and not payment_reference:
            raise ValidationError({"payment_status": ["A paid order needs a payment reference"]})

        now = datetime.now()
        total = round(sum(line["unit_price"] * line["quantity"] for line in lines), 2)

        order = cls(
            order_number=f"ORD-{now:%Y%m%d}-{sequence:05d}",
            sequence=sequence,
            user_id=user_id or GUEST_USER_ID,
            customer_name=customer_name or GUEST_CUSTOMER_NAME,
            customer_email=customer_email,
            items=[OrderItem(**line) for line in lines],
            total_amount=total,
            status=OrderStatus.PENDING.value,
            payment_status=payment_status,
            payment_method=payment_method,
            payment_reference=payment_reference,
            shipping_address=ShippingAddress(**shipping_address) if shipping_address else None,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderCommitted(
                order_id=str(order.id),
                order_number=order.order_number,
                user_id=order.user_id,
                customer_name=order.customer_name,
                items=json.dumps(lines),
                item_count=sum(line["quantity"] for line in lines),
                total_amount=total,
                payment_status=payment_status,
                payment_reference=payment_reference,
                committed_at=now,
            )
        )
        return order

    def change_status(self, new_status):
        valid = {s.value for s in OrderStatus}
        if new_status not in valid:
            raise ValidationError({"status": [f"Unknown order status '{new_status}'"]})

        previous = self.status
        self.status = new_status
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                previous_status=previous,
                new_status=new_status,
                changed_at=now,
            )
        )
