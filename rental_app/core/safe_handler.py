import logging
from functools import wraps

from fastapi import HTTPException, Request

from .exceptions import AppError, InternalError
from .friendly_msg import get_friendly_message

logger = logging.getLogger(__name__)


def _request_context(request: Request | None) -> str:
    if request is None:
        return "no-request"
    client_ip = request.client.host if request.client else "unknown"
    trace_id = request.headers.get("X-Request-ID", "none")
    return f"TraceID={trace_id} | {request.method} {request.url.path} from {client_ip}"


def safe_handler(func):
    @wraps(func)
    async def wrapper(*args, **kwargs):
        request: Request | None = None
        for arg in list(args) + list(kwargs.values()):
            if isinstance(arg, Request):
                request = arg
                break

        try:
            return await func(*args, **kwargs)
        except AppError as e:
            log = logger.error if e.status_code >= 500 else logger.warning
            log(
                "[%s] %s - %s: %s",
                type(e).__name__,
                e.status_code,
                _request_context(request),
                e.message,
            )
            raise
        except HTTPException as e:
            logger.warning(
                "[HTTPException] %s - %s: %s",
                e.status_code,
                _request_context(request),
                e.detail,
            )
            raise
        except Exception as e:
            logger.error(
                "[Unhandled Error] in %s | %s | Error: %s",
                func.__name__,
                _request_context(request),
                e,
                exc_info=True,
            )
            raise InternalError(get_friendly_message(e)) from e

    return wrapper
