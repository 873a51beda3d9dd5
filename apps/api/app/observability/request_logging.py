import logging
from time import perf_counter

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger("walletauth.http")

# Liveness probes are noisy; keep them out of INFO.
_QUIET_PATHS = frozenset({"/health"})


def _log_request(request: Request, status: int, start: float, *, failed: bool = False) -> None:
    path = request.url.path
    level = logging.DEBUG if path in _QUIET_PATHS and not failed else logging.INFO
    # Only method and path are recorded; request headers carry credentials.
    logger.log(
        logging.ERROR if failed else level,
        "http_request",
        extra={
            "event_name": "http_request",
            "method": request.method,
            "path": path,
            "status": status,
            "latency_ms": round((perf_counter() - start) * 1000, 2),
        },
        exc_info=failed,
    )


async def request_logging_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    start = perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        _log_request(request, 500, start, failed=True)
        raise

    _log_request(request, response.status_code, start)
    return response
