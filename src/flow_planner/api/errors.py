# src/flow_planner/api/errors.py

"""
Error -> HTTP status mapping.

Flat model: malformed input is 400, everything else (not found, duplicate,
storage failure, id generation) is 500. The body is always {"detail": "..."}.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.errors import FlowError, InvalidInputError

logger = logging.getLogger(__name__)


def _detail(exc: BaseException) -> str:
    return str(exc).strip() or exc.__class__.__name__


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    parts = []
    for err in errors:
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    detail = "; ".join(parts) or "invalid request body"
    logger.info("Bad request %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("Bad request %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": _detail(exc)})


async def _flow_error(request: Request, exc: FlowError) -> JSONResponse:
    logger.error("Request failed %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": _detail(exc)}
    )


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": _detail(exc)}
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidInputError, _invalid_input)  # type: ignore[arg-type]
    app.add_exception_handler(FlowError, _flow_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unexpected_error)
