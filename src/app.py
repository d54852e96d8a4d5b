"""Marketplace FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay:
#   - default/"test" -> memory provider, event_processing = "sync"
#   - "production"   -> PostgreSQL, event_processing = "async" (see server.py)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from marketplace.domain import load_elements, marketplace
from marketplace.utils.logging import add_context, clear_context

load_elements()
marketplace.init()

app = FastAPI(
    title="Marketplace API",
    description="Multi-curator marketplace: catalogue, inventory, checkout and orders",
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
    """Push the marketplace domain context and bind request log context."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    with marketplace.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from marketplace.applications.api import router as application_router  # noqa: E402
from marketplace.catalogue.api import product_router  # noqa: E402
from marketplace.inventory.api import inventory_router  # noqa: E402
from marketplace.ordering.api import cart_router, order_router  # noqa: E402
from marketplace.payments.api import methods_router, settings_router  # noqa: E402
from marketplace.shared.http import register_marketplace_handlers  # noqa: E402

app.include_router(product_router)
app.include_router(inventory_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(settings_router)
app.include_router(methods_router)
app.include_router(application_router)

register_exception_handlers(app)
register_marketplace_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": marketplace.name})
