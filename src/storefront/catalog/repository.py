"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalog.product import Product
from storefront.domain import storefront
from storefront.shared.errors import ProductNotFound

PAGE_SIZE = 100


@storefront.repository(part_of=Product)
class ProductRepository:
    def get_product(self, product_id) -> Product:
        """Load a product, raising ``ProductNotFound`` when the id is unknown."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            raise ProductNotFound(str(product_id)) from None

    def exists(self, product_id) -> bool:
        return bool(self._dao.query.filter(id=str(product_id)).all().items)

    def list_in_order(self) -> list[Product]:
        """All products in creation order, read page by page."""
        products = []
        while True:
            page = self._dao.query.order_by("created_at").offset(len(products)).limit(PAGE_SIZE).all()
            products.extend(page.items)
            if not page.items or len(products) >= page.total:
                return products

    def low_stock(self, threshold: int) -> list[Product]:
        return [p for p in self.list_in_order() if (p.stock or 0) <= threshold]

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
