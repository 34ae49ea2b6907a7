"""Translate raised conditions into HTTP error bodies."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clanboard.exceptions import ClanboardError
from clanboard.schemas import ErrorResponse

logger = logging.getLogger(__name__)


async def clanboard_error_handler(request: Request, exc: ClanboardError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.condition}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.condition}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.condition, detail=exc.message).model_dump(),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info(f"{request.method} {request.url.path} rejected: {problems}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="InvalidArgument", detail=problems).model_dump(),
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Internal", detail="Internal server error").model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClanboardError, clanboard_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
