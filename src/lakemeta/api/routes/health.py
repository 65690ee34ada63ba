"""
Health check API endpoints.

Reports whether the API is up and whether the Spark session behind the
catalog explorer is available.
"""

from fastapi import APIRouter, Request

from lakemeta.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    """Basic service information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "operational"
    }


@router.get("/health")
def health_check(request: Request):
    """
    Health of the API and the engine session.

    Returns:
        dict with overall status, per-component status, version and environment
    """
    explorer = getattr(request.app.state, "explorer", None)
    engine_status = "unknown"
    if explorer is not None:
        engine = explorer.get_table_meta_explorer()
        is_initialized = getattr(engine, "is_initialized", None)
        if is_initialized is not None:
            engine_status = "healthy" if is_initialized() else "unavailable"

    return {
        "status": "healthy",
        "components": {
            "api": "healthy",
            "spark": engine_status,
            "metadata_store": {
                "registered_tables": len(explorer.store.list_identities()) if explorer else 0
            },
        },
        "version": settings.app_version,
        "environment": settings.environment
    }
