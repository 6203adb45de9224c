"""
Exception handlers and endpoint wrapper that map any failure to an HTTP response.

Status codes and bodies come from `portfolio.exceptions.translator.translate`;
nothing here knows about individual error kinds.

Two paths lead there:
    - `translated` wraps endpoint functions and converts whatever they raise.
    - `register_exception_handlers` covers failures raised by dependencies
      (auth guards) before an endpoint runs.
"""

import functools
import json
import logging

import jwt
import pydantic
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from portfolio.exceptions.base import PortfolioError
from portfolio.exceptions.translator import translate

logger = logging.getLogger(__name__)


def error_response(exc: BaseException) -> JSONResponse:
    translated = translate(exc)
    if translated.status_code >= 500:
        logger.error("http.error_response", extra={"status": translated.status_code,
                                                  "error_type": type(exc).__name__})
    else:
        logger.info("http.error_response", extra={"status": translated.status_code,
                                                 "error_type": type(exc).__name__})
    return JSONResponse(status_code=translated.status_code, content=translated.body)


def translated(endpoint):
    """Run `endpoint` and turn any exception into its translated JSON response."""

    @functools.wraps(endpoint)
    async def wrapper(*args, **kwargs):
        try:
            return await endpoint(*args, **kwargs)
        except Exception as exc:
            return error_response(exc)

    return wrapper


async def translated_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return error_response(exc)


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type in (PortfolioError, pydantic.ValidationError, json.JSONDecodeError, jwt.InvalidTokenError):
        app.add_exception_handler(exc_type, translated_error_handler)
