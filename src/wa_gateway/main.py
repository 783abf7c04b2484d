"""Main FastAPI application for the WhatsApp REST gateway."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from wa_client.loader import ClientFactory

from . import __version__
from .errors import ClientSetupError, GatewayError
from .logging_config import setup_logging
from .models.config import APIConfig
from .models.responses import ErrorResponse
from .routes import account, chats, groups, messages, session
from .services.session import ClientSession

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ErrorResponse(error=error, timestamp=datetime.now()))
    )


def _is_missing(error: Dict[str, Any]) -> bool:
    # Required strings are declared with min_length=1, so "" counts as absent
    if error.get("type") == "missing":
        return True
    return error.get("type") == "string_too_short" and error.get("input") == ""


def _validation_message(errors: List[Dict[str, Any]]) -> str:
    """
    Summarize validation errors in one line.

    Absent fields are listed together ("to and message are required"); any
    other problem is reported as "<field>: <reason>".
    """
    missing: List[str] = []
    invalid: List[str] = []
    for error in errors:
        if error.get("type") == "json_invalid":
            return "Invalid JSON body"

        # loc is ("body" | "query" | "path", field, ...)
        loc = error.get("loc") or ("body",)
        name = ".".join(str(part) for part in loc[1:]) or str(loc[0])
        if _is_missing(error):
            if name not in missing:
                missing.append(name)
        else:
            invalid.append(f"{name}: {error.get('msg', 'Invalid value')}")

    parts: List[str] = []
    if len(missing) == 1:
        parts.append(f"{missing[0]} is required")
    elif missing:
        parts.append(f"{', '.join(missing[:-1])} and {missing[-1]} are required")
    parts.extend(invalid)
    return "; ".join(parts) or "Invalid request"


def list_endpoints(app: FastAPI) -> List[str]:
    """'METHOD /path' for every documented route, in registration order."""
    endpoints = []
    for path, operations in app.openapi().get("paths", {}).items():
        for method in sorted(operations):
            endpoints.append(f"{method.upper():<4} {path}")
    return endpoints


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    config: APIConfig = app.state.config
    client_session: ClientSession = app.state.session

    # Startup
    logger.info(f"Starting WhatsApp REST Gateway v{app.version}")
    logger.info(f"Configuration: {config.model_dump()}")
    logger.info("Available endpoints:")
    for endpoint in list_endpoints(app):
        logger.info(f"  {endpoint}")

    if config.init_on_startup:
        try:
            logger.info(client_session.start())
        except ClientSetupError as e:
            logger.error(f"WhatsApp client not started: {e.message}")

    yield

    # Shutdown
    await client_session.close()
    logger.info("API shutdown complete")


def create_app(
    config: Optional[APIConfig] = None,
    client_factory: Optional[ClientFactory] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: API configuration; read from the environment when omitted
        client_factory: Builds the WhatsApp client; when omitted the factory
            named by ``config.client_factory`` is imported on first start

    Returns:
        Configured application; the client starts during the lifespan when
        ``config.init_on_startup`` is set
    """
    config = config or APIConfig.from_env()
    setup_logging(config.log_level, config.log_format)

    app = FastAPI(
        title="WhatsApp REST Gateway",
        description="HTTP API over a WhatsApp Web session",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.config = config
    app.state.session = ClientSession(config, client_factory)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_exception_handler(request: Request, exc: GatewayError):
        """Render gateway errors with their own status code."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
        return _error_response(exc.status_code, exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with structured error responses."""

        # If detail is already a dict (from our endpoints), use it directly
        if isinstance(exc.detail, dict):
            error_detail = exc.detail
        else:
            error_detail = {
                "code": "HTTP_ERROR",
                "message": str(exc.detail),
                "details": None
            }
        return _error_response(exc.status_code, error_detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Missing or malformed input is a 400, not FastAPI's default 422."""
        errors = exc.errors()
        return _error_response(400, {
            "code": "VALIDATION_ERROR",
            "message": _validation_message(errors),
            "details": jsonable_encoder(errors)
        })

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        return _error_response(500, {
            "code": "INTERNAL_ERROR",
            "message": "Internal server error",
            "details": None
        })

    app.include_router(session.router)
    app.include_router(messages.router)
    app.include_router(chats.router)
    app.include_router(groups.router)
    app.include_router(account.router)

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint with API information."""
        return {
            "name": app.title,
            "version": app.version,
            "description": app.description,
            "docs": "/docs",
            "health": "/health",
            "endpoints": list_endpoints(app)
        }

    return app


app = create_app()


def main() -> None:
    config: APIConfig = app.state.config
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
