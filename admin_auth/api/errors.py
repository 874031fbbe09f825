"""
Exception handlers mapping errors onto the {code, message, data} envelope.

Envelopes are always sent with HTTP 200; the envelope code carries the outcome.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from admin_auth.domain.result import Result, ResultCode
from admin_auth.exceptions import AdminAuthError

logger = logging.getLogger(__name__)


def envelope(result: Result) -> JSONResponse:
    return JSONResponse(status_code=200, content=result.to_dict())


def validation_message(exc) -> str:
    """First error of a RequestValidationError or pydantic ValidationError as "field: message"."""
    errors = exc.errors()
    if not errors:
        return ResultCode.PARAM_ERROR.message
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "header"))
    message = first.get("msg", ResultCode.PARAM_ERROR.message)
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AdminAuthError)
    async def _admin_auth_error(request: Request, exc: AdminAuthError):
        return envelope(Result.error(exc.message, exc.code))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return envelope(Result.error(validation_message(exc), ResultCode.PARAM_ERROR))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return envelope(Result.error(ResultCode.ERROR.message, ResultCode.ERROR))
