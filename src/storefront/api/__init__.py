"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import (
    account_router,
    checkout_router,
    dashboard_router,
    order_router,
    product_router,
)

ROUTERS = [product_router, order_router, checkout_router, account_router, dashboard_router]

__all__ = [
    "ROUTERS",
    "account_router",
    "checkout_router",
    "dashboard_router",
    "order_router",
    "product_router",
    "register_error_handlers",
]
