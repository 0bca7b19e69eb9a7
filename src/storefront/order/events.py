"""Domain events for the Order aggregate.

Orders are append-only ledger entries: after the commit only the fulfilment
status moves, so there are just two facts to record.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderCommitted:
    """A cart passed inventory validation and was recorded as an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = String(required=True)
    customer_name = String(required=True)
    items = Text(required=True)  # JSON: list of line snapshots
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    payment_status = String(required=True)
    payment_reference = String()
    committed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An administrator moved an order to another fulfilment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String()
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
