import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .localization import language_from_header, translate
from .response import send_error

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Unhandled server error: %s", e)
            lang = language_from_header(request.headers.get("Accept-Language"))
            return send_error(translate("server.error", lang), status_code=500)
