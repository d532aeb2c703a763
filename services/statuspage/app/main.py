from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from .api.v1.routers.health import router as health_router
from .api.v1.routers.incident_updates import router as incident_updates_router
from .api.v1.routers.incidents import router as incidents_router
from .api.v1.routers.pages import router as pages_router
from .core.config import get_settings, validate_settings
from .core.logging import configure_structlog, get_logger
from .core.observability import add_prometheus, add_tracing
from .db import get_engine
from .middleware.logging import RequestLoggingMiddleware


def create_app() -> FastAPI:
    settings = get_settings()
    try:
        validate_settings(settings)
    except ValueError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    configure_structlog()
    logger = get_logger(__name__)

    app = FastAPI(title=settings.app_name, version=settings.app_version)

    if settings.rate_limit_enabled:
        limiter = Limiter(key_func=get_remote_address, default_limits=[f"{settings.rate_limit_per_min}/minute"])
        app.state.limiter = limiter
        app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        app.add_middleware(SlowAPIMiddleware)
        logger.info("rate_limiting.enabled", limit_per_min=settings.rate_limit_per_min)
    else:
        logger.info("rate_limiting.disabled")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Pydantic validation errors, with field details."""
        logger.warning(
            "request.validation_error",
            path=request.url.path,
            errors=jsonable_errors(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": "Validation error",
                "errors": jsonable_errors(exc),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.error(
            "request.database_error",
            path=request.url.path,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Database error occurred"},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request.unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Later middleware wraps earlier ones
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    add_prometheus(app, app_name="statuspage")
    if settings.otel_enabled:
        add_tracing(app, app_name="statuspage", endpoint=settings.otel_exporter_otlp_endpoint)

    @app.on_event("startup")
    def on_startup() -> None:
        logger.info(
            "startup",
            env=settings.env,
            timezone=settings.timezone,
            locale=settings.locale,
            database_url=settings.database_url,
        )
        get_engine()

    app.include_router(health_router)
    app.include_router(incidents_router)
    app.include_router(incident_updates_router)
    app.include_router(pages_router)

    @app.get("/", name="home")
    def root() -> dict:
        return {"service": "statuspage", "status": "ok"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold exception instances, which JSONResponse cannot encode
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


app = create_app()
