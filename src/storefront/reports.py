"""Back-office dashboard figures."""

from dataclasses import dataclass, field

from protean.utils.globals import current_domain

from storefront.account.account import Account, Role
from storefront.catalog.product import Product
from storefront.order.order import Order
from storefront.shared.settings import low_stock_threshold


@dataclass
class LowStockItem:
    product_id: str
    name: str
    stock: int


@dataclass
class DashboardSummary:
    revenue: float
    order_count: int
    product_count: int
    customer_count: int
    low_stock: list[LowStockItem] = field(default_factory=list)


def dashboard_summary(threshold: int | None = None) -> DashboardSummary:
    """Revenue counts only paid orders. Low stock means at or below ``threshold``."""
    threshold = low_stock_threshold() if threshold is None else threshold

    order_repo = current_domain.repository_for(Order)
    product_repo = current_domain.repository_for(Product)
    accounts = current_domain.repository_for(Account).list_all(role=Role.CUSTOMER.value)

    revenue = sum(o.total_amount for o in order_repo.paid())

    return DashboardSummary(
        revenue=round(revenue, 2),
        order_count=len(order_repo.list_recent()),
        product_count=len(product_repo.list_in_order()),
        customer_count=len(accounts),
        low_stock=[
            LowStockItem(product_id=str(p.id), name=p.name, stock=p.stock or 0)
            for p in product_repo.low_stock(threshold)
        ],
    )
