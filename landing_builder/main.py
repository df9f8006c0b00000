"""Main FastAPI application entry point."""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from landing_builder.api.v1.endpoints.build.routes import router as build_router
from landing_builder.api.v1.endpoints.health.routes import router as health_router
from landing_builder.core.exceptions import FatalException, ValidationException
from landing_builder.core.services.build_executor import BuildExecutor
from landing_builder.core.services.interfaces import BuildExecutorInterface
from landing_builder.core.services.task_queue import FatalErrorHandler, SerialTaskQueue
from landing_builder.settings import Settings, get_settings

logger = logging.getLogger("landing_builder")


def terminate_process(exc: BaseException) -> None:
    """Log an unrecoverable error and exit the process with status 1."""
    logger.critical(f"Fatal error, terminating build server: {exc!r}", exc_info=exc)
    logging.shutdown()
    os._exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Start the build queue worker and stop it on shutdown."""
    settings: Settings = app.state.settings
    task_queue: SerialTaskQueue = app.state.task_queue

    logger.info("Starting build server...")
    logger.info(f"Using port: {settings.port}")
    logger.info(f"Project path: {settings.project_path}")
    logger.info(f"Build command: {settings.build_command}")
    logger.info(
        f"Build timeout: {settings.build_timeout_seconds}s (configured, not enforced)"
    )

    task_queue.start()
    logger.info(f"Queue created, current length: {task_queue.pending_length()}")

    yield

    logger.info("Shutting down server...")
    await task_queue.stop()
    logger.info("Server stopped")


def create_app(
    settings: Optional[Settings] = None,
    executor: Optional[BuildExecutorInterface] = None,
    on_fatal_error: Optional[FatalErrorHandler] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        executor: Build executor, defaults to one built from settings
        on_fatal_error: Handler for a crashed queue worker, defaults to
            terminating the process

    Returns:
        Application owning its own build queue
    """
    settings = settings or get_settings()
    executor = executor or BuildExecutor(
        project_path=settings.project_path,
        command=settings.build_command,
        output_path=settings.build_output_path,
    )

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_queue = SerialTaskQueue(
        executor, on_fatal_error=on_fatal_error or terminate_process
    )

    app.include_router(build_router, prefix="/api")
    app.include_router(health_router)

    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(ValidationException)
    async def validation_exception_handler(request: Request, exc: ValidationException):
        """Handle missing request fields."""
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Handle malformed request bodies."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request body",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing and HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error(f"Server error: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware."""

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log all HTTP requests."""
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        logger.debug(f"Request started: {request.method} {request.url.path} from {client_ip}")

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} time={process_time:.3f}s"
        )

        return response


def run_server(
    settings: Optional[Settings] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """
    Serve the application with uvicorn until interrupted.

    Raises:
        FatalException: If the server cannot bind its listening socket
    """
    import uvicorn

    settings = settings or get_settings()
    host = host or settings.host
    port = port or settings.port
    settings = settings.model_copy(update={"host": host, "port": port})

    config = uvicorn.Config(
        create_app(settings),
        host=host,
        port=port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    logger.info(f"Attempting to start server on port: {port}")
    try:
        server.run()
    except SystemExit as e:
        if not e.code:
            raise
        logger.error(f"Server failed to start on {host}:{port}")
        raise FatalException(f"Server failed to start on {host}:{port}") from e
    except OSError as e:
        logger.error(f"Server failed to start: {e.strerror} (errno {e.errno})")
        raise FatalException(f"Server failed to start: {e}") from e


if __name__ == "__main__":
    run_server()
