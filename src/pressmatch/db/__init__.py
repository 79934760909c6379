# ABOUTME: Public API for the verified-release catalog database layer.
# ABOUTME: Exports connection management, catalog operations, and record types.

from pressmatch.db.catalog import DuplicateReleaseError, ReleaseCatalog, catalog_at
from pressmatch.db.connection import DEFAULT_DB_PATH, open_catalog, schema_version
from pressmatch.db.mapping import ReleaseRecord

__all__ = [
    "DEFAULT_DB_PATH",
    "DuplicateReleaseError",
    "ReleaseCatalog",
    "ReleaseRecord",
    "catalog_at",
    "open_catalog",
    "schema_version",
]
