"""Error taxonomy shared by the routers and services.

Every failure the API reports is an ``AppError`` carrying a stable ``code``.
The exception handlers below turn it into a discriminated failure body whose
message is looked up in the request's locale under ``errors.<code>``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from flashdeck.i18n.translator import get_translator


class AppError(Exception):
    status_code = 400
    code = "unexpected"

    def __init__(self, detail: str | None = None, *, code: str | None = None):
        if code is not None:
            self.code = code
        self.detail = detail or self.code
        super().__init__(self.detail)


class AuthenticationError(AppError):
    status_code = 401
    code = "unauthorized"


class AuthorizationError(AppError):
    status_code = 403
    code = "forbidden"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class ValidationFailed(AppError):
    status_code = 422
    code = "invalid_input"


class ConflictError(AppError):
    status_code = 400
    code = "conflict"


class ImportFormatError(AppError):
    status_code = 400
    code = "csv_no_valid_rows"


class FeatureNotEntitledError(AppError):
    status_code = 403
    code = "feature_not_entitled"


class ProviderError(AppError):
    """The text generation provider failed or returned something unusable."""

    status_code = 502
    code = "generation_failed"


class ProviderNotConfiguredError(ProviderError):
    status_code = 503
    code = "provider_not_configured"


class QuotaExceededError(ProviderError):
    status_code = 429
    code = "quota_exceeded"


class MalformedOutputError(ProviderError):
    code = "malformed_output"


def failure_body(request: Request, code: str) -> dict:
    t = get_translator(request)
    return {"success": False, "error": {"code": code, "message": t(f"errors.{code}")}}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} failed: {exc.code} ({exc.detail})")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=failure_body(request, exc.code), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = failure_body(request, ValidationFailed.code)
    body["error"]["fields"] = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
    ]
    return JSONResponse(status_code=ValidationFailed.status_code, content=body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=failure_body(request, "unexpected"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
