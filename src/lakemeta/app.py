"""
lakemeta Application Entry Point.

Builds the FastAPI application exposing the catalog bridge. The lifespan
creates the Spark engine session and the metadata store unless an explorer
was supplied up front, and stops the session on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from lakemeta.api.routes import catalog_router, health_router
from lakemeta.catalog.explorer import SparkMetadataExplorer
from lakemeta.catalog.store import JsonFileMetadataStore
from lakemeta.core.config import settings
from lakemeta.core.logging import get_logger
from lakemeta.integrations.spark import SparkEngineSession

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager.

    Args:
        app: FastAPI application instance to configure

    Yields:
        Control back to FastAPI after startup operations
    """
    logger.info("Starting catalog bridge")

    owns_engine = getattr(app.state, "explorer", None) is None
    if owns_engine:
        engine = SparkEngineSession()
        store = JsonFileMetadataStore(settings.metadata_store_path)
        app.state.explorer = SparkMetadataExplorer(engine, store)
        logger.info("Spark metadata explorer initialized", store=settings.metadata_store_path)

    yield

    logger.info("Shutting down catalog bridge")
    if owns_engine:
        app.state.explorer.get_table_meta_explorer().stop()


def create_app(explorer: Optional[SparkMetadataExplorer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        explorer: Pre-built explorer; the lifespan builds a Spark-backed one if omitted

    Returns:
        FastAPI: Configured application
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Spark catalog to platform metadata bridge",
        lifespan=lifespan,
    )
    if explorer is not None:
        app.state.explorer = explorer

    app.include_router(health_router)
    app.include_router(catalog_router)

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "lakemeta.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
