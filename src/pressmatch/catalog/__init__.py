# ABOUTME: Catalog collaborators: search, pricing, and storage protocols plus the Discogs client.
# ABOUTME: Exports the protocol types and request/response shapes used by the workflow.

from pressmatch.catalog.discogs import DiscogsProvider, create_discogs_provider
from pressmatch.catalog.provider import (
    CatalogSearch,
    PriceSummary,
    PricingSource,
    ReleaseStore,
    SearchRequest,
    SearchResponse,
)

__all__ = [
    "CatalogSearch",
    "DiscogsProvider",
    "PriceSummary",
    "PricingSource",
    "ReleaseStore",
    "SearchRequest",
    "SearchResponse",
    "create_discogs_provider",
]
