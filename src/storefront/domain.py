"""Storefront bounded context: Catalog, Order Ledger and Back-office Accounts.

The catalog (products and their stock levels) and the order ledger live in one
domain so that an order commit can validate inventory, decrement stock and
record the order inside a single unit of work.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
