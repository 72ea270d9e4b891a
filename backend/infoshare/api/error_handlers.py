"""Error Handlers: render typed errors raised by the routes as JSON responses.

Invariants:
    - InfoShareError → its own http_status and {"error", "details"?} body
    - RequestValidationError (bad JSON, wrong shape or types) → 400 "Invalid request body"
    - Exception (catch-all) → 500, never leaks internal details
    - Routes decide which error applies; handlers only render and log
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from infoshare.core.errors import InfoShareError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_infoshare_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def format_validation_details(errors: list[dict]) -> str:
    """Flatten pydantic error dicts into "field: message; ..." text."""
    parts = []
    for e in errors:
        loc = ".".join(str(part) for part in e.get("loc", ()) if part != "body")
        parts.append(f"{loc}: {e['msg']}" if loc else e["msg"])
    return "; ".join(parts)


def _register_infoshare_error_handler(app: FastAPI) -> None:

    @app.exception_handler(InfoShareError)
    async def infoshare_error_handler(request: Request, exc: InfoShareError):
        """Handle all InfoShare domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.http_status,
            "post_id": exc.context.post_id,
            "operation": exc.context.operation,
        }
        if exc.http_status >= 500:
            logger.error(f"{exc.code}: {exc.message} ({exc.details})", extra=extra)
        else:
            logger.warning(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request body",
                "details": format_validation_details(exc.errors()),
            },
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred"},
        )
