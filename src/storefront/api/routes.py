"""FastAPI endpoints for the storefront.

Thin adapters: translate the request into a ledger call and the result into a
response schema. Domain errors propagate to the registered exception handlers.
"""

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from storefront import ledger
from storefront.api.schemas import (
    AccountListResponse,
    AccountResponse,
    ChangeRoleRequest,
    CheckoutRequest,
    CommitOrderRequest,
    CreateProductRequest,
    DashboardResponse,
    LowStockResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PaymentResponse,
    ProcessPaymentRequest,
    ProductResponse,
    RegisterAccountRequest,
    ShippingAddressSchema,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.reports import dashboard_summary

product_router = APIRouter(prefix="/products", tags=["products"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
checkout_router = APIRouter(tags=["checkout"])
account_router = APIRouter(prefix="/accounts", tags=["accounts"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _iso(value):
    return value.isoformat() if value else None


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        slug=product.slug,
        category=product.category,
        price=product.price,
        stock=product.stock or 0,
        description=product.description,
        image_url=product.image_url,
        is_published=product.is_published,
        created_at=_iso(product.created_at),
    )


def _order_response(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        user_id=order.user_id,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                line_total=item.line_total,
                image_url=item.image_url,
            )
            for item in order.items
        ],
        total_amount=order.total_amount,
        status=order.status,
        payment_status=order.payment_status,
        payment_method=order.payment_method,
        payment_reference=order.payment_reference,
        shipping_address=(
            ShippingAddressSchema(
                street=address.street,
                city=address.city,
                state=address.state,
                zip=address.zip,
                country=address.country,
            )
            if address
            else None
        ),
        notes=order.notes,
        created_at=_iso(order.created_at),
    )


def _account_response(account) -> AccountResponse:
    return AccountResponse(
        id=str(account.id),
        name=account.name,
        email=account.email,
        role=account.role,
        is_active=account.is_active,
        created_at=_iso(account.created_at),
    )


def _order_fields(body: CommitOrderRequest) -> dict:
    return dict(
        items=[line.model_dump() for line in body.items],
        user_id=body.user_id,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        payment_method=body.payment_method,
        shipping_address=body.shipping_address.model_dump() if body.shipping_address else None,
        notes=body.notes,
    )


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    return [_product_response(p) for p in ledger.list_products()]


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    product = ledger.create_product(
        name=body.name,
        price=body.price,
        stock=body.stock,
        product_id=body.id,
        category=body.category,
        description=body.description,
        image_url=body.image_url,
        slug=body.slug,
        is_published=body.is_published,
    )
    return _product_response(product)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(ledger.get_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    product = ledger.update_product(product_id, **body.model_dump(exclude_none=True))
    return _product_response(product)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    ledger.delete_product(product_id)
    return StatusResponse()


# --- Order endpoints ---


@order_router.get("", response_model=OrderListResponse)
async def list_orders(user_id: str | None = None) -> OrderListResponse:
    """Most recent first."""
    return OrderListResponse(orders=[_order_response(o) for o in ledger.list_orders(user_id=user_id)])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def commit_order(body: CommitOrderRequest) -> OrderResponse:
    order = ledger.commit_order(**_order_fields(body))
    return _order_response(order)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(ledger.get_order(order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    order = ledger.update_order_status(order_id, body.status)
    return _order_response(order)


# --- Checkout and payments ---


@checkout_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(body: CheckoutRequest) -> OrderResponse:
    """Charge the cart total, then commit the order as paid."""
    order = await run_in_threadpool(ledger.checkout, **_order_fields(body))
    return _order_response(order)


@checkout_router.post("/payments", status_code=201, response_model=PaymentResponse)
async def process_payment(body: ProcessPaymentRequest) -> PaymentResponse:
    receipt = await run_in_threadpool(ledger.process_payment, body.amount, body.method, body.timeout)
    return PaymentResponse(transaction_id=receipt.transaction_id, amount=receipt.amount, method=receipt.method)


# --- Account endpoints ---


@account_router.get("", response_model=AccountListResponse)
async def list_accounts(role: str | None = None) -> AccountListResponse:
    return AccountListResponse(accounts=[_account_response(a) for a in ledger.list_accounts(role=role)])


@account_router.post("", status_code=201, response_model=AccountResponse)
async def register_account(body: RegisterAccountRequest) -> AccountResponse:
    account = ledger.register_account(name=body.name, email=body.email, role=body.role)
    return _account_response(account)


@account_router.put("/{account_id}/toggle", response_model=AccountResponse)
async def toggle_account_status(account_id: str) -> AccountResponse:
    return _account_response(ledger.toggle_account_status(account_id))


@account_router.put("/{account_id}/role", response_model=AccountResponse)
async def change_account_role(account_id: str, body: ChangeRoleRequest) -> AccountResponse:
    return _account_response(ledger.change_account_role(account_id, body.role))


# --- Dashboard ---


@dashboard_router.get("", response_model=DashboardResponse)
async def get_dashboard() -> DashboardResponse:
    summary = dashboard_summary()
    return DashboardResponse(
        revenue=summary.revenue,
        order_count=summary.order_count,
        product_count=summary.product_count,
        customer_count=summary.customer_count,
        low_stock=[
            LowStockResponse(product_id=item.product_id, name=item.name, stock=item.stock)
            for item in summary.low_stock
        ],
    )
