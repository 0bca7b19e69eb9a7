"""HTTP mapping for storefront errors.

Protean's handlers already turn validation errors into 400 and unknown
identifiers into 404. A declined payment is answered with 402.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.shared.errors import PaymentDeclined


async def payment_declined_handler(request: Request, exc: PaymentDeclined) -> JSONResponse:
    return JSONResponse(
        status_code=402,
        content={"error": str(exc), "reason": exc.reason, "amount": exc.amount, "method": exc.method},
    )


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(PaymentDeclined, payment_declined_handler)
