"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalog."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String()
    price: Float(required=True)
    stock: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Name, category, price or descriptive metadata of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockLevelSet:
    """An administrator set the stock count explicitly."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    set_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Units left the catalog because an order was committed."""

    __version__ = 1

    product_id: Identifier(required=True)
    product_name: String(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)
    withdrawn_at: DateTime(required=True)
