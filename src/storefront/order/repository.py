"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order, PaymentStatus
from storefront.shared.errors import OrderNotFound

PAGE_SIZE = 100


@storefront.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id) -> Order:
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            raise OrderNotFound(str(order_id)) from None

    def next_sequence(self) -> int:
        """Sequence number for the next committed order. Call under the write lock."""
        latest = self._dao.query.order_by("-sequence").limit(1).all().first
        return (latest.sequence if latest else 0) + 1

    def list_recent(self, user_id: str | None = None) -> list[Order]:
        """Orders, most recently committed first."""
        query = self._dao.query.order_by("-sequence")
        if user_id:
            query = query.filter(user_id=user_id)

        orders = []
        while True:
            page = query.offset(len(orders)).limit(PAGE_SIZE).all()
            orders.extend(page.items)
            if not page.items or len(orders) >= page.total:
                return orders

    def paid(self) -> list[Order]:
        return [o for o in self.list_recent() if o.payment_status == PaymentStatus.PAID.value]
