import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mytrip.api.routes import health, stats, tour
from mytrip.errors import (
    AggregateExhaustionError,
    ClientError,
    ConfigurationError,
    NotFoundError,
    TourApiError,
    TransientError,
)
from mytrip.logging import configure_logging
from mytrip.models.contracts import ErrorResponse

configure_logging()

logger = structlog.get_logger()

app = FastAPI(
    title="MyTrip API",
    version=health.VERSION,
    docs_url="/docs",
    redoc_url=None,
)

# Most specific first
_ERROR_CODES: list[tuple[type[TourApiError], str]] = [
    (ConfigurationError, "configuration_error"),
    (NotFoundError, "not_found"),
    (ClientError, "client_error"),
    (TransientError, "upstream_unavailable"),
    (AggregateExhaustionError, "aggregate_unavailable"),
]


def _error_code(exc: TourApiError) -> str:
    for cls, code in _ERROR_CODES:
        if isinstance(exc, cls):
            return code
    return "tour_api_error"


def _status_for(exc: TourApiError) -> int:
    if isinstance(exc, ConfigurationError):
        return 500
    if exc.status_code and 400 <= exc.status_code < 600:
        return exc.status_code
    if isinstance(exc, ClientError):
        return 400
    return 500


def _error_response(request: Request, status_code: int, body: ErrorResponse) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
    response.headers["X-Request-ID"] = getattr(
        request.state, "request_id", request.headers.get("X-Request-ID", "")
    )
    return response


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Attach a request ID to every request and echo it in X-Request-ID."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(TourApiError)
async def tour_api_exception_handler(request: Request, exc: TourApiError) -> JSONResponse:
    status_code = _status_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "tour_api_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        status=status_code,
        upstream_status=exc.status_code,
        message=exc.message,
    )
    return _error_response(
        request,
        status_code,
        ErrorResponse(error=_error_code(exc), message=exc.message, retryable=exc.retryable),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Return ErrorResponse JSON for query/path validation errors."""
    messages = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return _error_response(
        request,
        422,
        ErrorResponse(error="validation_error", message="; ".join(messages), retryable=False),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(
        request,
        500,
        ErrorResponse(
            error="internal_error", message="An unexpected error occurred", retryable=True
        ),
    )


app.include_router(health.router)
app.include_router(tour.router, prefix="/api/v1")
app.include_router(stats.router, prefix="/api/v1")
