"""Pydantic request/response schemas for the storefront API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Product Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Summer Yellow Tee",
                    "category": "Men",
                    "price": 35.0,
                    "stock": 120,
                    "description": "Casual yellow t-shirt for summer, 100% cotton.",
                    "image_url": "https://images.example.com/yellow-tee.jpg",
                }
            ]
        }
    }

    id: str | None = Field(None, max_length=255)
    name: str = Field(..., max_length=255)
    category: str | None = Field(None, max_length=100)
    price: float
    stock: int = 0
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    slug: str | None = Field(None, max_length=255)
    is_published: bool = True


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 29.99, "stock": 80}]}}

    name: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    price: float | None = None
    stock: int | None = None
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    is_published: bool | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str | None = None
    category: str | None = None
    price: float
    stock: int
    description: str | None = None
    image_url: str | None = None
    is_published: bool = True
    created_at: str | None = None


# --- Order Schemas ---


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int


class ShippingAddressSchema(BaseModel):
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    zip: str | None = Field(None, max_length=20)
    country: str = Field(..., max_length=100)


class CommitOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "u-1001",
                    "customer_name": "Jane Smith",
                    "items": [{"product_id": "1", "quantity": 2}],
                    "payment_method": "cod",
                }
            ]
        }
    }

    user_id: str | None = Field(None, max_length=100)
    customer_name: str | None = Field(None, max_length=255)
    customer_email: str | None = Field(None, max_length=255)
    items: list[OrderLineRequest]
    payment_method: str | None = Field(None, max_length=20)
    shipping_address: ShippingAddressSchema | None = None
    notes: str | None = None


class CheckoutRequest(CommitOrderRequest):
    payment_method: str = Field("stripe", max_length=20)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "shipped"}]}}

    status: str = Field(..., max_length=30)


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    line_total: float
    image_url: str | None = None


class OrderResponse(BaseModel):
    id: str
    order_number: str | None = None
    user_id: str
    customer_name: str
    customer_email: str | None = None
    items: list[OrderItemResponse]
    total_amount: float
    status: str
    payment_status: str
    payment_method: str | None = None
    payment_reference: str | None = None
    shipping_address: ShippingAddressSchema | None = None
    notes: str | None = None
    created_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


# --- Payment Schemas ---


class ProcessPaymentRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"amount": 70.0, "method": "stripe"}]}}

    amount: float
    method: str = Field(..., max_length=20)
    timeout: float | None = None


class PaymentResponse(BaseModel):
    transaction_id: str
    amount: float
    method: str


# --- Account Schemas ---


class RegisterAccountRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Jane Smith", "email": "jane@example.com", "role": "customer"}]}
    }

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=254)
    role: str | None = Field(None, max_length=20)


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., max_length=20)


class AccountResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    created_at: str | None = None


class AccountListResponse(BaseModel):
    accounts: list[AccountResponse]


# --- Dashboard ---


class LowStockResponse(BaseModel):
    product_id: str
    name: str
    stock: int


class DashboardResponse(BaseModel):
    revenue: float
    order_count: int
    product_count: int
    customer_count: int
    low_stock: list[LowStockResponse]


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
