"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.api.http.routers import health, users
from src.user_service.api.utils.app_startup import configure_logging
from src.user_service.core.errors import DatabaseOperationError
from src.user_service.core.services import DbSessionService
from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]

INTERNAL_ERROR = "Internal Server Error"


# --- Lifecycle hooks ---
def startup(dependencies: ApplicationDependencies, config: ConfigData) -> None:
    logger.info("Starting up application in {} environment", config.app.environment)
    database_service = dependencies.database_service
    if database_service.health_check():
        logger.info("Connected to database {}", database_service.target)
    else:
        # Requests will fail individually until the database is reachable
        logger.error("Database {} is not reachable", database_service.target)


def shutdown(dependencies: ApplicationDependencies, *, dispose: bool) -> None:
    logger.info("Shutting down application")
    if dispose:
        dependencies.database_service.dispose()


# --- Fault translation ---
def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "-"


def _database_error_handler(expose_details: bool):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        request_id = _request_id(request)
        logger.bind(
            status_code=500,
            error_type=type(exc).__name__,
            operation=getattr(exc, "operation", None),
        ).opt(exception=exc).error("request.database_error")
        detail = str(exc) if expose_details else INTERNAL_ERROR
        return JSONResponse(
            status_code=500,
            content={"detail": detail, "request_id": request_id},
            headers={"X-Request-ID": request_id},
        )

    return handle


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": INTERNAL_ERROR, "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- FastAPI app setup ---
def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the application.

    When ``dependencies`` is given the caller owns them and they are used
    as-is. Otherwise the database service is created from configuration at
    startup and disposed at shutdown.
    """
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = dependencies is None
        deps = dependencies or ApplicationDependencies(
            database_service=DbSessionService(config.database)
        )
        app.state.app_dependencies = deps
        startup(deps, config)
        try:
            yield
        finally:
            shutdown(deps, dispose=owned)

    is_production = config.app.environment == "production"
    application = FastAPI(
        title="User Service",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    if dependencies is not None:
        application.state.app_dependencies = dependencies

    application.middleware("http")(log_requests)
    application.add_exception_handler(
        DatabaseOperationError, _database_error_handler(expose_details=not is_production)
    )

    application.include_router(health.router)
    application.include_router(users.router)
    return application


configure_logging()
app = create_app()
