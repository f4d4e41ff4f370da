"""Storefront FastAPI application.

Serves the seller dashboard API, the public storefront and checkout, and
the carrier callback. Commands are processed synchronously per request.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the configuration overlay (providers, event store).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context

storefront.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Shops, checkout and courier delivery",
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
    """Push the storefront domain context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    with storefront.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers & error mapping
# ---------------------------------------------------------------------------
from storefront.api import ROUTERS  # noqa: E402
from storefront.api.errors import register_storefront_exception_handlers  # noqa: E402

for router in ROUTERS:
    app.include_router(router)

register_storefront_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    from storefront.carrier import get_carrier
    from storefront.messaging import get_messenger

    return JSONResponse(
        content={
            "status": "ok",
            "domain": storefront.name,
            "carrier_configured": get_carrier().is_configured,
            "messaging_configured": get_messenger().is_configured,
        }
    )
