"""Product aggregate root: a catalog entry and its stock count.

Stock is only ever decremented by ``withdraw`` during an order commit and only
ever set by an administrator through ``set_stock``. Both guard the
non-negative invariant before touching the field.
"""

import re
from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.errors import InsufficientStock


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "product"


@storefront.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    slug: String(max_length=255)
    category: String(max_length=100)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    description: Text()
    image_url: String(max_length=500)
    is_published: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(
        cls,
        name,
        price,
        stock=0,
        category=None,
        description=None,
        image_url=None,
        slug=None,
        is_published=True,
        product_id=None,
    ):
        from storefront.catalog.events import ProductAdded

        if price is not None and price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        if stock is not None and stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        now = datetime.now()
        values = dict(
            name=name,
            slug=slug or slugify(name or ""),
            category=category,
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
            is_published=is_published,
            created_at=now,
            updated_at=now,
        )
        if product_id:
            values["id"] = product_id

        product = cls(**values)
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
                added_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        category=None,
        price=None,
        description=None,
        image_url=None,
        is_published=None,
    ):
        from storefront.catalog.events import ProductDetailsUpdated

        if price is not None and price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})

        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if category is not None:
            self.category = category
        if price is not None:
            self.price = price
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url
        if is_published is not None:
            self.is_published = is_published

        now = datetime.now()
        self.updated_at = now
        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                updated_at=now,
            )
        )

    def set_stock(self, quantity):
        """Set the stock count explicitly (admin restock or correction)."""
        from storefront.catalog.events import StockLevelSet

        if quantity is None or quantity < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        previous = self.stock or 0
        self.stock = quantity
        now = datetime.now()
        self.updated_at = now
        self.raise_(
            StockLevelSet(
                product_id=self.id,
                previous_stock=previous,
                new_stock=quantity,
                set_at=now,
            )
        )

    def has_stock_for(self, quantity):
        return (self.stock or 0) >= quantity

    def withdraw(self, quantity):
        """Take units out of stock for a committed order."""
        from storefront.catalog.events import StockWithdrawn

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock_for(quantity):
            raise InsufficientStock(
                product_id=str(self.id),
                product_name=self.name,
                available=self.stock or 0,
                requested=quantity,
            )

        self.stock = self.stock - quantity
        now = datetime.now()
        self.updated_at = now
        self.raise_(
            StockWithdrawn(
                product_id=self.id,
                product_name=self.name,
                quantity=quantity,
                remaining=self.stock,
                withdrawn_at=now,
            )
        )
