"""Seller applications API package."""

from marketplace.applications.api.routes import router

__all__ = ["router"]
