"""Exception handlers for marketplace errors not covered by Protean's FastAPI integration."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError

from marketplace.shared.errors import ConflictError

logger = structlog.get_logger(__name__)


def _message(exc: Exception):
    return getattr(exc, "messages", None) or str(exc)


def register_marketplace_handlers(app: FastAPI) -> None:
    """409 for conflicts, 404 for missing (or not owned) resources."""

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        logger.info("Request conflicted with current state", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=409, content={"error": exc.message, **exc.context})

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        # A concurrent writer committed first; nothing from this request was kept
        logger.warning("Concurrent update rejected", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=409,
            content={"error": "The resource was changed by another request, please retry"},
        )

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": _message(exc)})
