"""Tests for the Product aggregate root."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields

from storefront.catalog.events import ProductAdded, ProductDetailsUpdated, StockLevelSet, StockWithdrawn
from storefront.catalog.product import Product, slugify
from storefront.shared.errors import InsufficientStock


class TestProductConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert Product.element_type == DomainObjects.AGGREGATE

    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in ("name", "slug", "category", "price", "stock", "description", "image_url", "is_published"):
            assert name in fields

    def test_create_product(self):
        product = Product.create(name="Pearl Necklace", price=250.0, stock=8, category="Jewellery")
        assert product.name == "Pearl Necklace"
        assert product.slug == "pearl-necklace"
        assert product.price == 250.0
        assert product.stock == 8
        assert product.is_published is True
        assert product.created_at is not None

    def test_create_with_caller_supplied_id(self):
        product = Product.create(name="Tee", price=35.0, product_id="1")
        assert product.id == "1"

    def test_create_raises_product_added(self):
        product = Product.create(name="Tee", price=35.0, stock=3)
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.stock == 3

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Product.create(name="Tee", price=-1.0)
        assert "price" in exc.value.messages

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Product.create(name="Tee", price=1.0, stock=-3)
        assert "stock" in exc.value.messages

    def test_free_product_is_allowed(self):
        product = Product.create(name="Sticker", price=0.0)
        assert product.price == 0.0


class TestSlugify:
    def test_spaces_and_case(self):
        assert slugify("Ultrabook Series X") == "ultrabook-series-x"

    def test_punctuation_collapses(self):
        assert slugify("  Gold & Silver -- Rings!") == "gold-silver-rings"

    def test_empty_name_falls_back(self):
        assert slugify("!!!") == "product"


class TestUpdateDetails:
    def test_only_given_fields_change(self):
        product = Product.create(name="Tee", price=35.0, category="Men", description="Cotton")
        product.update_details(price=30.0)
        assert product.price == 30.0
        assert product.name == "Tee"
        assert product.category == "Men"
        assert product.description == "Cotton"

    def test_rename_refreshes_slug(self):
        product = Product.create(name="Tee", price=35.0)
        product.update_details(name="Summer Tee")
        assert product.slug == "summer-tee"

    def test_raises_details_updated(self):
        product = Product.create(name="Tee", price=35.0)
        product._events.clear()
        product.update_details(price=20.0)
        assert isinstance(product._events[-1], ProductDetailsUpdated)
        assert product._events[-1].price == 20.0

    def test_negative_price_rejected(self):
        product = Product.create(name="Tee", price=35.0)
        with pytest.raises(ValidationError):
            product.update_details(price=-5.0)
        assert product.price == 35.0


class TestStock:
    def test_set_stock(self):
        product = Product.create(name="Tee", price=35.0, stock=2)
        product.set_stock(40)
        assert product.stock == 40
        event = product._events[-1]
        assert isinstance(event, StockLevelSet)
        assert event.previous_stock == 2
        assert event.new_stock == 40

    def test_set_negative_stock_rejected(self):
        product = Product.create(name="Tee", price=35.0, stock=2)
        with pytest.raises(ValidationError):
            product.set_stock(-1)
        assert product.stock == 2

    def test_withdraw_decrements(self):
        product = Product.create(name="Tee", price=35.0, stock=5)
        product.withdraw(3)
        assert product.stock == 2
        event = product._events[-1]
        assert isinstance(event, StockWithdrawn)
        assert event.quantity == 3
        assert event.remaining == 2

    def test_withdraw_everything(self):
        product = Product.create(name="Tee", price=35.0, stock=5)
        product.withdraw(5)
        assert product.stock == 0

    def test_withdraw_more_than_available(self):
        product = Product.create(name="Tee", price=35.0, stock=5)
        with pytest.raises(InsufficientStock) as exc:
            product.withdraw(6)
        assert exc.value.available == 5
        assert exc.value.product_name == "Tee"
        assert product.stock == 5

    def test_withdraw_zero_rejected(self):
        product = Product.create(name="Tee", price=35.0, stock=5)
        with pytest.raises(ValidationError):
            product.withdraw(0)

    def test_has_stock_for(self):
        product = Product.create(name="Tee", price=35.0, stock=5)
        assert product.has_stock_for(5)
        assert not product.has_stock_for(6)
