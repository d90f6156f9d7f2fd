from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from dotenv import load_dotenv

# Load .env file before importing app modules
load_dotenv(override=True)

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from focusflow.api.v1.router import api_router
from focusflow.config import settings
from focusflow.exceptions import FocusFlowException, extract_sql_error_message
from focusflow.utils.logger import configure_logger

configure_logger(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    logger.info("Starting up FastAPI application", environment=settings.ENVIRONMENT)
    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)


def _error_body(code: str, message: Any, details: Dict[str, Any] | None = None):
    """The web client shows ``error`` as-is, so it stays a plain message."""
    content: Dict[str, Any] = {"error": message, "code": code}
    if details:
        content["details"] = details
    return content


@app.exception_handler(FocusFlowException)
async def focusflow_exception_handler(
    request: Request, exc: FocusFlowException
) -> JSONResponse:
    """Handle custom FocusFlow application exceptions."""
    logger.error(
        "FocusFlow application error",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        path=request.url.path,
        method=request.method,
    )

    # Technical details stay out of production responses
    details = exc.details if settings.ENVIRONMENT != "prod" else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.message, details),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Bad client input is a 400, like the domain ValidationError."""
    logger.error(
        "Validation error",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method,
    )

    formatted_errors = [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=400,
        content=_error_body(
            "VALIDATION_ERROR",
            "Input validation failed",
            {"validation_errors": formatted_errors},
        ),
    )


@app.exception_handler(PydanticValidationError)
async def model_validation_exception_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Stored rows that no longer fit the response models."""
    logger.error(
        "Model validation error",
        errors=exc.errors(),
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(
            "INTERNAL_ERROR", "An unexpected error occurred. Please try again later."
        ),
    )


@app.exception_handler(OperationalError)
async def operational_error_handler(
    request: Request, exc: OperationalError
) -> JSONResponse:
    """Handle database operational errors (connection issues, etc.)."""
    logger.error(
        "Database operational error",
        error=str(exc.orig) if exc.orig else str(exc),
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=503,
        content=_error_body(
            "DATABASE_UNAVAILABLE",
            "Database is temporarily unavailable. Please try again later.",
        ),
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Handle other SQLAlchemy database errors."""
    user_message, technical_details = extract_sql_error_message(exc)

    logger.exception(
        "Database error",
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
        technical_details=technical_details,
    )

    return JSONResponse(
        status_code=500, content=_error_body("DATABASE_ERROR", user_message)
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPExceptions."""
    logger.error(
        "HTTP error",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=exc.status_code, content=_error_body("HTTP_ERROR", str(exc.detail))
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for all unhandled exceptions."""
    logger.exception(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(
            "INTERNAL_ERROR", "An unexpected error occurred. Please try again later."
        ),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_V1_STR)

# Generated images copied into object storage
app.mount(
    settings.MEDIA_URL,
    StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False),
    name="media",
)
