"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from taskboard import __version__
from taskboard.api.dependencies import Container, build_container
from taskboard.api.errors import register_exception_handlers
from taskboard.api.routes import projects, system, tasks, users
from taskboard.api.settings import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[Container] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        settings: Settings to run with. Read from the environment if not given.
        container: Pre-built services, mainly for tests.

    Returns:
        The configured FastAPI application.
    """
    settings = settings or (container.settings if container else Settings.from_env())
    configure_logging(settings)
    container = container or build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("starting taskboard with database %s", settings.database_path)
        await container.startup()
        yield
        logger.info("shutting down taskboard")
        await container.shutdown()

    app = FastAPI(
        title="taskboard",
        description="Task and project management API with read-through caching",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    register_exception_handlers(app, debug=settings.debug)

    app.include_router(system.router)
    app.include_router(users.router)
    app.include_router(projects.router)
    app.include_router(tasks.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)
