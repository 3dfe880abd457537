import time
from typing import Iterable, Optional
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from streak_tracker.core.logging import latency_bucket_ms, log_event, request_id_ctx_var

HEALTH_PATHS = ("/health", "/healthz")
MAX_REQUEST_ID_LENGTH = 128


def _usable_request_id(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = value.strip()
    if not value or len(value) > MAX_REQUEST_ID_LENGTH or not value.isprintable():
        return None
    return value


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Correlate every request with a request_id.

    The id comes from the caller's header when it is short and printable,
    otherwise a fresh uuid4 is issued. It is exposed on request.state and
    the logging context var for the duration of the request, and echoed
    back on the response. Health checks are polled constantly, so their
    completion lines go out at debug instead of info.
    """

    def __init__(self, app, header_name: str = "x-request-id", quiet_paths: Iterable[str] = HEALTH_PATHS):
        super().__init__(app)
        self.header_name = header_name
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request, call_next):
        rid = _usable_request_id(request.headers.get(self.header_name)) or str(uuid4())
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            request_id_ctx_var.reset(token)

        response.headers[self.header_name] = rid

        path = request.url.path
        log_event(
            "debug" if path in self.quiet_paths else "info",
            "request.complete",
            request_id=rid,
            event_type="http_request",
            extra={
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "latency_ms": round(duration_ms, 2),
                "latency_bucket": latency_bucket_ms(duration_ms),
            },
        )
        return response
