"""This file contains the main application entry point."""

import uuid
from contextlib import asynccontextmanager
from typing import (
    Any,
    Dict,
    List,
    Optional,
)

from fastapi import (
    FastAPI,
    Request,
)
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from experiment_api.api.v1.api import api_router
from experiment_api.constants.http import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_MAX_AGE,
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    SECURITY_HEADERS,
)
from experiment_api.core.config import settings
from experiment_api.core.firebase import FirestoreConnection
from experiment_api.core.limiter import limiter
from experiment_api.core.logging import logger
from experiment_api.domain.exceptions import (
    DomainError,
    InvalidRequestError,
    RecordNotFoundError,
    RepositoryError,
    SigningUnavailableError,
)
from experiment_api.infrastructure.firestore import FirestoreExperimentRepository
from experiment_api.shared.middleware import RequestLoggingMiddleware
from experiment_api.shared.response_models import (
    ErrorResponse,
    HealthResponse,
)

GENERIC_SERVER_ERROR_MESSAGE = "Internal server error"

# Most specific first
DOMAIN_ERROR_STATUS = (
    (InvalidRequestError, HTTP_400_BAD_REQUEST),
    (SigningUnavailableError, HTTP_400_BAD_REQUEST),
    (RecordNotFoundError, HTTP_404_NOT_FOUND),
    (RepositoryError, HTTP_500_INTERNAL_SERVER_ERROR),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events.

    The Firestore connection is opened once here and shared by all requests.
    A repository already attached to ``app.state`` by the embedding process
    is used as is and left untouched on shutdown.
    """
    logger.info(
        "application_startup",
        project_name=settings.PROJECT_NAME,
        version=settings.VERSION,
        api_prefix=settings.API_PREFIX,
        link_signing_enabled=settings.link_signing_enabled,
    )

    connection: Optional[FirestoreConnection] = None
    if getattr(app.state, "experiment_repository", None) is None:
        connection = FirestoreConnection(settings)
        connection.connect()
        app.state.experiment_repository = FirestoreExperimentRepository(
            connection.client,
            settings.EXPERIMENTS_COLLECTION,
        )

    yield

    if connection is not None:
        connection.close()
        del app.state.experiment_repository
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS_LIST,
    allow_credentials="*" not in settings.CORS_ORIGINS_LIST,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
    max_age=CORS_MAX_AGE,
)

# Set up rate limiter exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build a JSON error response with security headers."""
    body = ErrorResponse(error=error, message=message, details=details)
    response = JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )
    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value
    return response


def _status_for(exc: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return HTTP_500_INTERNAL_SERVER_ERROR


# Exception handlers
@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Handle domain errors.

    Client errors carry their message; server-side failures are reported
    with a generic message and the details only go to the log.

    Args:
        request: The request that caused the error
        exc: The domain exception

    Returns:
        JSONResponse: A formatted error response
    """
    error_id = str(uuid.uuid4())
    status_code = _status_for(exc)

    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "domain_error",
            error_id=error_id,
            error_type=type(exc).__name__,
            error_code=exc.error_code,
            message=str(exc),
            details=getattr(exc, "details", None),
            path=request.url.path,
            method=request.method,
        )
        message = GENERIC_SERVER_ERROR_MESSAGE
    else:
        logger.warning(
            "domain_error",
            error_id=error_id,
            error_type=type(exc).__name__,
            error_code=exc.error_code,
            message=exc.message,
            path=request.url.path,
            method=request.method,
        )
        message = exc.message

    return error_response(status_code, exc.error_code or type(exc).__name__, message)


def _describe_validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    described = []
    for error in exc.errors():
        # "body" is implied for JSON payload errors
        location = [str(part) for part in error["loc"] if part != "body"]
        described.append(
            {
                "field": ".".join(location),
                "message": error["msg"],
                "type": error.get("type", "validation_error"),
            }
        )
    return described


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed path parameters or bodies as 422."""
    errors = _describe_validation_errors(exc)
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        error_count=len(errors),
        fields=[error["field"] for error in errors],
    )
    return error_response(
        HTTP_422_UNPROCESSABLE_ENTITY,
        "ValidationError",
        "Request validation failed",
        details={"errors": errors},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Wrap framework HTTP errors (unknown route, wrong method) in the error envelope."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=str(exc.detail),
        path=request.url.path,
    )
    return error_response(
        exc.status_code,
        "HTTPException",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Last resort handler. Only the error id reaches the client log trail."""
    error_id = str(uuid.uuid4())
    logger.error(
        "unhandled_exception",
        error_id=error_id,
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )
    return error_response(
        HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        GENERIC_SERVER_ERROR_MESSAGE,
        details={"errorId": error_id},
    )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["root"][0])
async def root(request: Request):
    """Root endpoint returning basic API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.APP_ENV.value,
        "api_prefix": settings.API_PREFIX,
    }


@app.get("/health", response_model=HealthResponse)
@limiter.exempt
async def health_check() -> HealthResponse:
    """Liveness probe. Does not touch the document store."""
    return HealthResponse(ok=True)


# Add direct execution support for development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "experiment_api.main:app",
        host="0.0.0.0",
        port=4000,
        reload=True,
        log_level="info"
    )
