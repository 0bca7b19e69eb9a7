"""Catalog administration: commands and handler.

Products are added, edited and removed here. Orders hold their own name and
price snapshots, so deleting a product leaves the ledger intact.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    product_id: Identifier()
    name: String(required=True, max_length=255)
    category: String(max_length=100)
    price: Float(required=True)
    stock: Integer(default=0)
    description: Text()
    image_url: String(max_length=500)
    slug: String(max_length=255)
    is_published: Boolean(default=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    category: String(max_length=100)
    price: Float()
    stock: Integer()
    description: Text()
    image_url: String(max_length=500)
    is_published: Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class CatalogAdminHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)

        if command.product_id and repo.exists(command.product_id):
            raise ValidationError({"id": [f"Product {command.product_id} already exists"]})

        product = Product.create(
            name=command.name,
            price=command.price,
            stock=command.stock if command.stock is not None else 0,
            category=command.category,
            description=command.description,
            image_url=command.image_url,
            slug=command.slug,
            is_published=command.is_published if command.is_published is not None else True,
            product_id=command.product_id,
        )
        repo.add(product)

        logger.info("Product added", product_id=str(product.id), name=product.name, stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)

        product.update_details(
            name=command.name,
            category=command.category,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
            is_published=command.is_published,
        )
        if command.stock is not None:
            product.set_stock(command.stock)

        repo.add(product)
        logger.info("Product updated", product_id=str(product.id), price=product.price, stock=product.stock)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_product(command.product_id)
        repo.remove(product)
        logger.info("Product deleted", product_id=str(command.product_id))
