"""Checkout pricing FastAPI application.

Serves the pricing engine over HTTP. Every pricing and checkout request runs
inside the pricing domain context with the request id bound to the log
context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay and the log level.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pricing.domain import pricing
from pricing.utils.logging import add_context, clear_context

pricing.init()

_DOMAIN_PREFIXES = ("/pricing", "/checkout")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Checkout Pricing API",
    description="Pricing strategies, tax resolution, order totals and checkout quotes",
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
    """Push the pricing domain context and bind a request id for logging."""
    if not request.url.path.startswith(_DOMAIN_PREFIXES):
        # Health check, docs, etc.
        return await call_next(request)

    add_context(request_id=request.headers.get("x-request-id") or str(uuid.uuid4()), path=request.url.path)
    try:
        with pricing.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from pricing.api import checkout_router, pricing_router  # noqa: E402

app.include_router(pricing_router)
app.include_router(checkout_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domains": {"pricing": {"name": pricing.name}}})
