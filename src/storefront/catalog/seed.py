"""Demo catalog loaded by ``manage.py seed``."""

import structlog
from protean.utils.globals import current_domain

from storefront import ledger
from storefront.catalog.product import Product

logger = structlog.get_logger(__name__)

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=600&q=80"

DEMO_PRODUCTS = [
    {
        "product_id": "1",
        "name": "Summer Yellow Tee",
        "price": 35.00,
        "category": "Men",
        "description": "Casual yellow t-shirt for summer, 100% cotton.",
        "stock": 120,
        "image_url": _IMG.format("1521572163474-6864f9cf17ab"),
    },
    {
        "product_id": "2",
        "name": "Classic Green Shirt",
        "price": 55.00,
        "category": "Men",
        "description": "Formal green shirt, perfect for office wear.",
        "stock": 45,
        "image_url": _IMG.format("1596755094514-f87e34085b2c"),
    },
    {
        "product_id": "3",
        "name": "Pro Gaming PC",
        "price": 899.99,
        "category": "Electronics",
        "description": "High performance gaming PC with RGB lighting.",
        "stock": 10,
        "image_url": _IMG.format("1587202372775-e229f172b9d7"),
    },
    {
        "product_id": "4",
        "name": "Ultrabook Series X",
        "price": 650.00,
        "category": "Electronics",
        "description": "Reliable laptop for work and study, lightweight design.",
        "stock": 25,
        "image_url": _IMG.format("1496181133206-80ce9b88a853"),
    },
    {
        "product_id": "5",
        "name": "Gold Drop Earrings",
        "price": 45.00,
        "category": "Jewellery",
        "description": "Traditional gold earrings with intricate design.",
        "stock": 50,
        "image_url": _IMG.format("1535632066927-ab7c9ab60908"),
    },
    {
        "product_id": "6",
        "name": "Diamond Bangle Set",
        "price": 120.00,
        "category": "Jewellery",
        "description": "Beautiful gold bangles, set of 2.",
        "stock": 15,
        "image_url": _IMG.format("1611591437281-460bfbe1220a"),
    },
    {
        "product_id": "7",
        "name": "Pearl Necklace",
        "price": 250.00,
        "category": "Jewellery",
        "description": "Elegant gold necklace for special occasions.",
        "stock": 8,
        "image_url": _IMG.format("1599643478518-17488fbbcd75"),
    },
    {
        "product_id": "8",
        "name": "Red Summer Dress",
        "price": 65.00,
        "category": "Women",
        "description": "Vintage style red dress.",
        "stock": 30,
        "image_url": _IMG.format("1515372039744-b8f02a3ae446"),
    },
]


def seed_catalog() -> int:
    """Add any demo product that is not in the catalog yet. Returns how many were added."""
    repo = current_domain.repository_for(Product)
    added = 0
    for data in DEMO_PRODUCTS:
        if repo.exists(data["product_id"]):
            continue
        ledger.create_product(**data)
        added += 1

    logger.info("Demo catalog seeded", added=added, total=len(DEMO_PRODUCTS))
    return added
