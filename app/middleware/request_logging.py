import time
import uuid

from fastapi import Request

from app.utils.logger import get_logger

logger = get_logger("access")

REQUEST_ID_HEADER = "X-Request-ID"


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers[REQUEST_ID_HEADER] = request_id

    # populated by get_current_user on authenticated routes
    auth = getattr(request.state, "user", None)

    logger.info(
        "request handled",
        extra={
            "request_id": request_id,
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": elapsed_ms,
            "tenant_id": str(auth.tenant_id) if auth else "-",
            "user_id": str(auth.user_id) if auth else "-",
        },
    )
    return response
