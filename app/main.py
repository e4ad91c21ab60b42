# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the CodeBuddy API.
# It builds the gateway pipeline and owns the process lifecycle:
#
#   startup:  connect database (fatal on failure) -> start daily scheduler
#   shutdown: stop scheduler -> close database
#
# Uvicorn only starts accepting connections after lifespan startup returns,
# so no request can arrive before the database is connected.
#
# Usage:
#   uvicorn app.main:app --reload
#   codebuddy-api            # console script, binds API_HOST:PORT
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.config import Settings, get_settings
from app.exceptions import DatabaseConnectionError
from app.gateway import Gateway
from app.routers import ROUTE_COLLECTIONS
from lib.supabase_client import Database
from workers.scheduler import DailyQuestionScheduler

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_lifespan(
    settings: Settings,
    database: Database,
    scheduler: DailyQuestionScheduler | None,
):
    """
    Application lifespan handler.

    Startup fails (and uvicorn exits) if the database can't be reached.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting CodeBuddy API in {settings.ENVIRONMENT} mode")

        try:
            await database.connect()
        except DatabaseConnectionError as e:
            logger.critical(f"Database connection failed: {e.message}")
            raise

        if scheduler is not None:
            scheduler.start()

        base_url = f"http://localhost:{settings.PORT}"
        logger.info(f"Server running on port {settings.PORT}")
        logger.info(f"Health check: {base_url}/health")
        logger.info(f"API base: {base_url}/api")

        yield

        logger.info("Shutting down CodeBuddy API")
        if scheduler is not None:
            await scheduler.stop()
        database.close()

    return lifespan


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    scheduler: DailyQuestionScheduler | None = None,
    route_collections: list | None = None,
) -> FastAPI:
    """
    Build the application with explicitly constructed collaborators.

    Args:
        settings: Defaults to get_settings()
        database: Defaults to a Database built from settings
        scheduler: Defaults to a DailyQuestionScheduler when
            DAILY_QUESTIONS_ENABLED, otherwise none
        route_collections: (prefix, router) pairs; defaults to ROUTE_COLLECTIONS
    """
    settings = settings or get_settings()
    database = database or Database.from_settings(settings)
    if scheduler is None and settings.DAILY_QUESTIONS_ENABLED:
        scheduler = DailyQuestionScheduler.from_settings(settings, database)

    app = FastAPI(
        title="CodeBuddy API",
        description="Backend for CodeBuddy: topics, practice questions, progress, badges and mock interviews.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=build_lifespan(settings, database, scheduler),
    )
    app.state.scheduler = scheduler

    gateway = Gateway(app, settings, database)
    gateway.configure()
    for prefix, router in (ROUTE_COLLECTIONS if route_collections is None else route_collections):
        gateway.mount(prefix, router)
    return gateway.build()


def run() -> None:
    """Console entry point: serve the app on API_HOST:PORT."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.PORT,
        log_level="debug" if settings.DEBUG else settings.LOG_LEVEL.lower(),
    )


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    run()
