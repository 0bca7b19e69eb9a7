"""Event handler: flags products whose stock dropped to the low-stock threshold."""

import structlog
from protean.utils.mixins import handle

from storefront.catalog.events import StockLevelSet, StockWithdrawn
from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.shared.settings import low_stock_threshold

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Product)
class LowStockAlertHandler:
    @handle(StockWithdrawn)
    def on_stock_withdrawn(self, event: StockWithdrawn) -> None:
        threshold = low_stock_threshold()
        if event.remaining <= threshold:
            logger.warning(
                "Product stock is low",
                product_id=str(event.product_id),
                product_name=event.product_name,
                remaining=event.remaining,
                threshold=threshold,
            )

    @handle(StockLevelSet)
    def on_stock_level_set(self, event: StockLevelSet) -> None:
        logger.info(
            "Stock level set",
            product_id=str(event.product_id),
            previous_stock=event.previous_stock,
            new_stock=event.new_stock,
        )
