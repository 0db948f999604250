"""Map ordering failures to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import AccessDeniedError, InvalidTransitionError

logger = structlog.get_logger(__name__)

_STATUS_CODES = {
    ValidationError: 400,
    AccessDeniedError: 403,
    ObjectNotFoundError: 404,
    InvalidTransitionError: 409,
}


def error_messages(exc) -> dict:
    """Field-keyed messages for the response body.

    Repositories raise ``ObjectNotFoundError`` with a plain string, domain code
    raises it with a dict; both end up as ``{field: [message, ...]}``.
    """
    messages = getattr(exc, "messages", None)
    if messages:
        return messages if isinstance(messages, dict) else {"_entity": [str(messages)]}
    if exc.args and isinstance(exc.args[0], dict):
        return exc.args[0]
    return {"_entity": [str(exc)]}


def _handler_for(status_code):
    async def handler(request: Request, exc):
        logger.warning(
            "request_rejected",
            path=request.url.path,
            status_code=status_code,
            error=type(exc).__name__,
        )
        return JSONResponse(status_code=status_code, content={"error": error_messages(exc)})

    return handler


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's default handlers, then the ordering-specific mappings on top."""
    register_exception_handlers(app)
    for exc_class, status_code in _STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler_for(status_code))
