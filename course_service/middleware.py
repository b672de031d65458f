# course_service/middleware.py
import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("course_service.access")


def configure_logging(level: str = "INFO"):
    """Configure root logging once for the process"""
    logging.basicConfig(level=level, format=LOG_FORMAT)


class LoggingMiddleware(BaseHTTPMiddleware):
    """One line per course API call, plus the error title when a handler answered with one.

    The exception handlers in main.py leave the title of the error body on
    `request.state.error_title`.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        client = request.client.host if request.client else "unknown"
        route = f"{request.method} {request.url.path}"

        # Body is left unread so the route can still consume the stream
        logger.debug(f"{route} <- {client} | Query params: {dict(request.query_params)}")

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(f"{route} -> unhandled {type(e).__name__} after {elapsed_ms:.1f}ms")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        error_title = getattr(request.state, "error_title", None)
        if error_title is None:
            logger.info(f"{route} -> {response.status_code} in {elapsed_ms:.1f}ms | Client: {client}")
        else:
            level = logging.ERROR if response.status_code >= 500 else logging.WARNING
            logger.log(
                level,
                f"{route} -> {response.status_code} {error_title} in {elapsed_ms:.1f}ms | Client: {client}",
            )

        return response
