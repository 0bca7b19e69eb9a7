"""Storefront FastAPI application.

Serves the catalog, the order ledger, checkout and the back-office endpoints.
Commands are processed synchronously inside each request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import ROUTERS, register_error_handlers
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, configure_logging

# PROTEAN_ENV selects the config overlay; LOG_LEVEL / ENVIRONMENT shape logging
configure_logging()
storefront.init()

app = FastAPI(
    title="Storefront API",
    description="Catalog, order ledger, checkout and back-office administration",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and tag log lines with the request."""
    request_id = request.headers.get("x-request-id") or uuid4().hex[:16]
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    with storefront.domain_context():
        response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


for router in ROUTERS:
    app.include_router(router)

register_error_handlers(app)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
