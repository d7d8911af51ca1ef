import logging
from collections import defaultdict

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import AppError
from .localization import language_from_header, translate
from .response import send_error

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if str(p) not in _LOCATION_PREFIXES]
    return ".".join(parts) if parts else "general"


class ValidationErrorHandler:
    async def __call__(self, request: Request, exc: RequestValidationError):
        errors: dict[str, list[str]] = defaultdict(list)

        for err in exc.errors():
            message = str(err.get("msg"))
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            errors[_field_name(err.get("loc", ()))].append(message)

        logger.warning(
            "Validation failed on %s %s: %s",
            request.method,
            request.url.path,
            dict(errors),
        )
        lang = language_from_header(request.headers.get("Accept-Language"))
        return send_error(
            translate("validation.failed", lang), dict(errors), status_code=400
        )


class AppErrorHandler:
    async def __call__(self, request: Request, exc: AppError):
        headers = None
        if exc.status_code == 401:
            headers = {"WWW-Authenticate": "Bearer"}
        return send_error(
            exc.message, exc.errors, status_code=exc.status_code, headers=headers
        )


class HTTPErrorHandler:
    async def __call__(self, request: Request, exc: StarletteHTTPException):
        lang = language_from_header(request.headers.get("Accept-Language"))
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = translate("route.not.found", lang)
        else:
            message = str(exc.detail)
        return send_error(
            message,
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )
