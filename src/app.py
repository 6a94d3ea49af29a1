"""SickFits FastAPI application.

Web server for the storefront domain. Commands are processed synchronously
and every request runs inside the sickfits domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sickfits.domain import sickfits
from sickfits.utils.logging import bind_request_context, clear_request_context
from sickfits.utils.settings import get_settings

sickfits.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="SickFits API",
    description="Storefront: accounts, items, cart and checkout",
)

# Session cookies need credentialed CORS, which rules out a wildcard origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the sickfits domain context and request log context for each request."""
    bind_request_context(method=request.method, path=request.url.path)
    try:
        with sickfits.domain_context():
            response = await call_next(request)
    finally:
        clear_request_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from sickfits.api import (  # noqa: E402
    auth_router,
    cart_router,
    item_router,
    order_router,
    register_exception_handlers,
    user_router,
)

app.include_router(auth_router)
app.include_router(item_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(user_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": sickfits.name},
        }
    )
