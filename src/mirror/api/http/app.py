"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.mirror.api.http.app_data import ApplicationDependencies
from src.mirror.api.http.routers import health, load, users
from src.mirror.api.utils.app_startup import configure_logging
from src.mirror.core.services import DocumentStoreService, UpstreamClient
from src.mirror.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    configure_logging()
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    if getattr(app.state, "app_dependencies", None) is None:
        app.state.app_dependencies = ApplicationDependencies.build(
            store_service=DocumentStoreService(config.database),
            upstream_client=UpstreamClient(config.upstream),
        )
        app.state.owns_dependencies = True

    if not await app.state.app_dependencies.store_service.health_check():
        logger.warning("Document store is not reachable at startup")


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    if getattr(app.state, "owns_dependencies", False):
        await app.state.app_dependencies.aclose()
        app.state.app_dependencies = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app)
    try:
        yield
    finally:
        await shutdown(app)


async def log_requests(request: Request, call_next):
    """Access log with request correlation; last-resort 500 for escaping errors."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return Response(
                "Internal Server Error",
                status_code=500,
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    # Unknown paths and unsupported methods on known paths look the same
    if exc.status_code in (404, 405):
        return Response("Endpoint not found", status_code=404)
    return Response(str(exc.detail), status_code=exc.status_code)


def create_app(dependencies: ApplicationDependencies | None = None) -> FastAPI:
    """Build the application.

    Args:
        dependencies: Pre-built collaborators. When omitted they are built from
            the current configuration at startup and closed at shutdown.
    """
    application = FastAPI(
        title="placeholder-mirror",
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    application.state.app_dependencies = dependencies
    application.state.owns_dependencies = False

    application.middleware("http")(log_requests)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)

    application.include_router(load.router)
    application.include_router(users.router)
    application.include_router(health.router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
