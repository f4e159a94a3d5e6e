from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

_LOG = logging.getLogger("querykit.http")


class ValidationError(ValueError):
    """Client input that cannot be turned into a filter, ordering or column reference."""

    def __init__(self, message: str, *, operation: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        return self.message


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error_handler(request: Request, exc: ValidationError):
        _LOG.info(
            "%s %s rejected operation=%s detail=%s",
            request.method,
            request.url.path,
            exc.operation or "-",
            exc.message,
        )
        return JSONResponse(status_code=400, content={"detail": exc.message})
