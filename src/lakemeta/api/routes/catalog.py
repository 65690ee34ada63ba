"""
Catalog browsing and table import API endpoints.

Handlers are plain functions so FastAPI runs the blocking Spark calls in its
threadpool.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from lakemeta.catalog.explorer import SparkMetadataExplorer
from lakemeta.core.config import settings
from lakemeta.core.exceptions import ErrorKind, MetadataBridgeError
from lakemeta.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix=f"{settings.api_prefix}/catalog", tags=["catalog"])

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ENGINE_UNAVAILABLE: 503,
    ErrorKind.UNSUPPORTED: 501,
}


def get_explorer(request: Request) -> SparkMetadataExplorer:
    """Explorer attached to the application state."""
    return request.app.state.explorer


def to_http_error(error: MetadataBridgeError) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(error.kind, 500),
        detail={"kind": error.kind.value, "message": str(error)},
    )


@router.get("/databases")
def list_databases(explorer: SparkMetadataExplorer = Depends(get_explorer)):
    """List databases visible to the engine."""
    try:
        return {"databases": explorer.list_databases()}
    except MetadataBridgeError as e:
        logger.error("Listing databases failed", error=str(e))
        raise to_http_error(e) from e


@router.get("/tables")
def list_tables(
    database: Optional[str] = None,
    explorer: SparkMetadataExplorer = Depends(get_explorer),
):
    """List tables, optionally within one database."""
    try:
        return {"database": database, "tables": explorer.list_tables(database)}
    except MetadataBridgeError as e:
        logger.error("Listing tables failed", database=database, error=str(e))
        raise to_http_error(e) from e


@router.get("/databases/{database}/tables/{table}")
def preview_table_metadata(
    database: str,
    table: str,
    project: Optional[str] = None,
    explorer: SparkMetadataExplorer = Depends(get_explorer),
):
    """Reconcile a table's metadata without registering it."""
    try:
        descriptor, extension = explorer.load_table_metadata(
            database, table, project or settings.default_project
        )
    except MetadataBridgeError as e:
        raise to_http_error(e) from e

    return {
        "table": descriptor.to_dict(),
        "extension": extension.to_dict(),
        "related_resources": explorer.get_related_resources(descriptor),
    }


@router.post("/databases/{database}/tables/{table}/import")
def import_table_metadata(
    database: str,
    table: str,
    project: Optional[str] = None,
    explorer: SparkMetadataExplorer = Depends(get_explorer),
):
    """Reconcile a table's metadata and register it in the metadata store."""
    try:
        descriptor, extension = explorer.load_table_metadata(
            database, table, project or settings.default_project
        )
    except MetadataBridgeError as e:
        raise to_http_error(e) from e

    stored, stored_extension = explorer.store.put(descriptor, extension)
    logger.info(f"Imported table {stored.identity}", uuid=stored.uuid)

    return {
        "table": stored.to_dict(),
        "extension": stored_extension.to_dict() if stored_extension else None,
    }


@router.get("/registered")
def list_registered_tables(explorer: SparkMetadataExplorer = Depends(get_explorer)):
    """List tables registered in the metadata store."""
    identities = explorer.store.list_identities()
    return {"tables": identities, "total": len(identities)}
