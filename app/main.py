from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from slowapi.errors import RateLimitExceeded

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import CampusOpsError, ValidationFailedError, error_response
from app.core.logging_config import logger
from app.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from app.core.rate_limiter import limiter, rate_limit_exceeded_handler
from app.api.router import api_router
from app.db.seed_data import ensure_bootstrap_admin
from app.storage import Storage, create_storage


def validate_critical_config(config: Settings) -> None:
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []
    warnings = []

    if not config.JWT_SECRET_KEY or config.JWT_SECRET_KEY == "CHANGE_ME":
        if config.ENVIRONMENT == "production":
            errors.append("JWT_SECRET_KEY is not set or using default value")
        else:
            warnings.append("JWT_SECRET_KEY is using the default value")

    if config.STORAGE_BACKEND == "database" and not config.DATABASE_URL:
        errors.append("DATABASE_URL is not set for STORAGE_BACKEND=database")

    if config.STORAGE_BACKEND == "memory":
        warnings.append("STORAGE_BACKEND=memory - all data is lost on restart")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    logger.info("[Startup] ✓ Critical configuration validated")


def _validation_errors(exc: RequestValidationError) -> list:
    """Flatten FastAPI's error list to [{field, message}] with camelCase fields"""
    errors = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" location prefix
        loc = list(error.get("loc", ()))[1:]
        # Aliases already arrive camelCased; snake_case input names are converted
        field = ".".join(
            to_camel(part) if isinstance(part, str) and "_" in part else str(part)
            for part in loc
        )
        errors.append({"field": field or "body", "message": error.get("msg", "Invalid value")})
    return errors


def create_app(config: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """
    Build the application.

    The store is chosen here once (STORAGE_BACKEND) and kept on
    `app.state.storage`; tests pass their own. `config` drives the store,
    token signing and startup checks. Password hashing rounds and the rate
    limiter are process-wide and always follow the environment settings.
    """
    config = config or default_settings
    storage = storage or create_storage(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown"""
        logger.info("=" * 60)
        logger.info(f"Starting {config.APP_NAME}...")
        logger.info(f"Environment: {config.ENVIRONMENT}")
        logger.info(f"Storage backend: {storage.backend_name}")
        logger.info("=" * 60)

        validate_critical_config(config)
        await storage.startup()

        if config.BOOTSTRAP_ADMIN_USERNAME:
            await ensure_bootstrap_admin(
                storage,
                username=config.BOOTSTRAP_ADMIN_USERNAME,
                password=config.BOOTSTRAP_ADMIN_PASSWORD,
                email=config.BOOTSTRAP_ADMIN_EMAIL,
            )

        yield

        logger.info(f"Shutting down {config.APP_NAME}...")
        await storage.shutdown()

    app = FastAPI(
        title=config.APP_NAME,
        description="Administration backend for courses, projects and finance",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.storage = storage
    app.state.settings = config

    # Add rate limiter state and exception handler
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Add middleware (order matters - last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=1024 * 1024)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    @app.exception_handler(CampusOpsError)
    async def campusops_exception_handler(request: Request, exc: CampusOpsError):
        return JSONResponse(status_code=exc.status_code, content=error_response(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        error = ValidationFailedError(_validation_errors(exc))
        logger.info(
            f"Validation failed: {request.method} {request.url.path}",
            extra={"event_type": "validation_failed", "validation_errors": error.details["errors"]}
        )
        return JSONResponse(status_code=error.status_code, content=error_response(error))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        # Exception text stays in the log, never in the response
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Internal server error",
                    "details": {},
                },
            },
        )

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint"""
        return {
            "message": f"Welcome to {config.APP_NAME}",
            "version": "1.0.0",
            "docs": "/docs",
            "health": f"{config.API_PREFIX}/health/live",
        }

    app.include_router(api_router, prefix=config.API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=default_settings.SERVER_HOST,
        port=default_settings.SERVER_PORT,
        reload=default_settings.DEBUG
    )
