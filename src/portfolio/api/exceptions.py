from __future__ import annotations

from fastapi import FastAPI, Request  # type: ignore[import-not-found]
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from portfolio.commons.exceptions import (
    BaseCoreException,
    BaseServiceConflictException,
    BaseServiceException,
    BaseServiceForbiddenException,
    BaseServiceNotFoundException,
    BaseServiceUnauthorizedException,
    BaseServiceUnProcessableException,
)
from portfolio.commons.logging import logger
from portfolio.core.db import DuplicateKeyException


def _envelope(
    request: Request, code: int, message: str, details: str | None
) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={
            "exception": {
                "code": code,
                "message": message,
                "details": details,
                "path": request.url.path,
                "method": request.method,
            }
        },
    )


def configure_global_exception_handlers(app: FastAPI) -> FastAPI:
    @app.exception_handler(BaseServiceException)
    async def service_exception_handler(
        request: Request, exc: BaseServiceException
    ) -> JSONResponse:
        if isinstance(exc, BaseServiceNotFoundException):
            code = status.HTTP_404_NOT_FOUND
        elif isinstance(exc, BaseServiceUnProcessableException):
            code = status.HTTP_422_UNPROCESSABLE_CONTENT
        elif isinstance(exc, BaseServiceConflictException):
            code = status.HTTP_409_CONFLICT
        elif isinstance(exc, BaseServiceUnauthorizedException):
            code = status.HTTP_401_UNAUTHORIZED
        elif isinstance(exc, BaseServiceForbiddenException):
            code = status.HTTP_403_FORBIDDEN
        else:
            code = status.HTTP_400_BAD_REQUEST

        return _envelope(request, code, exc.message, exc.details)

    @app.exception_handler(BaseCoreException)
    async def core_exception_handler(
        request: Request, exc: BaseCoreException
    ) -> JSONResponse:
        if isinstance(exc, DuplicateKeyException):
            return _envelope(request, status.HTTP_409_CONFLICT, exc.message, None)

        logger.error(
            "%s on %s %s: %s (%s)",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
        # Storage and integrity details stay in the log.
        return _envelope(request, status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, None)

    return app
