"""
Metadata stores for registered table descriptors.

Stores are keyed by qualified table name. Keys are matched case-insensitively
and a bare table name resolves against the ``DEFAULT`` database.
"""

import json
import os
import tempfile
import threading
import time
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple

from lakemeta.catalog.models import TableDescriptor, TableExtensionDescriptor
from lakemeta.core.logging import get_logger

logger = get_logger(__name__)


def normalize_identity(qualified_name: str) -> str:
    """Canonical store key for a qualified table name."""
    if "." not in qualified_name:
        qualified_name = f"default.{qualified_name}"
    return qualified_name.upper()


class MetadataStore(Protocol):
    """Key-value store of registered table descriptors."""

    def get(self, qualified_name: str) -> Optional[TableDescriptor]:
        ...

    def get_extension(self, qualified_name: str) -> Optional[TableExtensionDescriptor]:
        ...

    def put(
        self,
        descriptor: TableDescriptor,
        extension: Optional[TableExtensionDescriptor] = None,
    ) -> Tuple[TableDescriptor, Optional[TableExtensionDescriptor]]:
        ...

    def list_identities(self) -> List[str]:
        ...


class InMemoryMetadataStore:
    """Metadata store held in process memory."""

    def __init__(self):
        self.tables: Dict[str, TableDescriptor] = {}
        self.extensions: Dict[str, TableExtensionDescriptor] = {}
        # guards tables and extensions
        self._lock = threading.RLock()

    def get(self, qualified_name: str) -> Optional[TableDescriptor]:
        """Get table descriptor by qualified name."""
        return self.tables.get(normalize_identity(qualified_name))

    def get_extension(self, qualified_name: str) -> Optional[TableExtensionDescriptor]:
        """Get extension descriptor by qualified name."""
        return self.extensions.get(normalize_identity(qualified_name))

    def put(
        self,
        descriptor: TableDescriptor,
        extension: Optional[TableExtensionDescriptor] = None,
    ) -> Tuple[TableDescriptor, Optional[TableExtensionDescriptor]]:
        """
        Register a descriptor pair.

        The stored copies are stamped with the current time in epoch
        milliseconds; the arguments themselves are left untouched.

        Returns:
            The stored (descriptor, extension) pair
        """
        now = int(time.time() * 1000)
        key = normalize_identity(descriptor.identity)

        stored = replace(descriptor, last_modified=now)
        stored_extension = None
        if extension is not None:
            stored_extension = replace(extension, last_modified=now)

        with self._lock:
            self.tables[key] = stored
            if stored_extension is not None:
                self.extensions[key] = stored_extension

        logger.info(f"Registered table {key}", uuid=stored.uuid)
        return stored, stored_extension

    def list_identities(self) -> List[str]:
        """List qualified names of all registered tables."""
        with self._lock:
            return sorted(self.tables)


class JsonFileMetadataStore(InMemoryMetadataStore):
    """Metadata store persisted as a JSON document on disk."""

    def __init__(self, storage_path: str):
        super().__init__()
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)
        self.catalog_file = self.storage_path / "catalog.json"

        # Load existing catalog
        self._load_catalog()

    def put(
        self,
        descriptor: TableDescriptor,
        extension: Optional[TableExtensionDescriptor] = None,
    ) -> Tuple[TableDescriptor, Optional[TableExtensionDescriptor]]:
        """Register a descriptor pair and write the catalog to disk."""
        with self._lock:
            stored = super().put(descriptor, extension)
            self._save_catalog()
        return stored

    def _save_catalog(self):
        """Save catalog to disk, replacing the previous file atomically."""
        with self._lock:
            catalog_data = {
                "tables": {key: desc.to_dict() for key, desc in self.tables.items()},
                "extensions": {key: ext.to_dict() for key, ext in self.extensions.items()},
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            payload = json.dumps(catalog_data, indent=2)

            fd, tmp_path = tempfile.mkstemp(dir=self.storage_path, prefix=".catalog-", suffix=".json")
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(payload)
                os.replace(tmp_path, self.catalog_file)
            except BaseException:
                os.unlink(tmp_path)
                raise

    def _load_catalog(self):
        """Load catalog from disk."""
        if not self.catalog_file.exists():
            return

        with open(self.catalog_file, "r") as f:
            catalog_data = json.load(f)

        for key, table_data in catalog_data.get("tables", {}).items():
            self.tables[key] = TableDescriptor.from_dict(table_data)
        for key, ext_data in catalog_data.get("extensions", {}).items():
            self.extensions[key] = TableExtensionDescriptor.from_dict(ext_data)

        logger.info(f"Loaded catalog with {len(self.tables)} tables", path=str(self.catalog_file))
