"""Translate ordering error kinds into JSON responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ordering.errors import OrderingError

logger = structlog.get_logger(__name__)


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, kind=type(exc).__name__, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_ordering_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
