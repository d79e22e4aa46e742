"""Marketplace API package."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from marketplace.api.routes import (
    cart_router,
    catalogue_router,
    notification_router,
    order_router,
    payment_router,
    seller_router,
    wishlist_router,
)
from marketplace.domain import marketplace
from marketplace.shared.errors import PermissionDenied
from marketplace.utils.logging import add_context, clear_context

routers = [
    cart_router,
    catalogue_router,
    payment_router,
    order_router,
    notification_router,
    wishlist_router,
    seller_router,
]


def install_error_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP responses."""
    register_exception_handlers(app)

    @app.exception_handler(PermissionDenied)
    async def permission_denied_handler(request: Request, exc: PermissionDenied):
        return JSONResponse(status_code=403, content={"error": exc.message})


def create_app() -> FastAPI:
    """Build the API around an already initialized ``marketplace`` domain."""
    app = FastAPI(
        title="Furniture Marketplace API",
        description="Catalogue moderation, carts, payments, orders and seller settlements",
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
        """Push the marketplace domain context and the caller log context for each request."""
        add_context(caller_id=request.headers.get("x-caller-id"), path=request.url.path)
        try:
            with marketplace.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    for router in routers:
        app.include_router(router)
    install_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": marketplace.name})

    return app


__all__ = ["create_app", "install_error_handlers", "routers"]
