"""Payments API package."""

from marketplace.payments.api.routes import methods_router, settings_router

__all__ = ["settings_router", "methods_router"]
