# ABOUTME: Discogs catalog collaborator: release search by media identifiers, plus pricing.
# ABOUTME: Searches by barcode, catalog number, and matrix terms, then hydrates top releases.

import logging
import os
from dataclasses import replace

from pressmatch.catalog.discogs_parser import (
    parse_marketplace_stats,
    parse_price_suggestions,
    parse_release,
    parse_search_results,
)
from pressmatch.catalog.http import HttpClient, PressmatchHttpClient
from pressmatch.catalog.pricing import summarize_prices
from pressmatch.catalog.provider import PriceSummary, SearchRequest, SearchResponse
from pressmatch.config import DISCOGS_TOKEN_ENV
from pressmatch.errors import CollaboratorError
from pressmatch.matching.candidate import Candidate
from pressmatch.matching.signals import matrix_search_terms, normalize_barcode

logger = logging.getLogger(__name__)

_DISCOGS_API = "https://api.discogs.com"
_PER_PAGE = 15
_MAX_MATRIX_QUERIES = 3
_MAX_CANDIDATES = 10
_HYDRATE_LIMIT = 5

BARCODE_SEARCH = "barcode-search"
CATNO_SEARCH = "catno-search"
MATRIX_SEARCH = "matrix-search"
TEXT_SEARCH = "text-search"


def create_discogs_provider(token: str | None = None) -> "DiscogsProvider":
    """Build a provider with a real HTTP client, reading the token from the environment."""
    token = token or os.environ.get(DISCOGS_TOKEN_ENV) or None
    if token is None:
        logger.warning("%s is not set; Discogs search will be rate limited", DISCOGS_TOKEN_ENV)
    return DiscogsProvider(http_client=PressmatchHttpClient(token=token))


class DiscogsProvider:
    """Release search and pricing backed by the Discogs API.

    Satisfies both CatalogSearch and PricingSource. Uses a dependency-injected
    HttpClient for testability. Discogs does not classify matches, so the
    response carries candidates only; ranking happens in the core.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "discogs"

    def search(self, request: SearchRequest) -> SearchResponse:
        """Search Discogs with every usable signal and hydrate the top results.

        Queries run most-precise first: barcode, catalog number, matrix terms,
        then artist/title when the search is manual or nothing else was read.
        Stops once enough unique releases are collected.

        Raises:
            CollaboratorError: When a search query fails.
        """
        collected: dict[int, Candidate] = {}
        for params, reason in self._queries(request):
            if len(collected) >= _MAX_CANDIDATES:
                break
            params = {
                **params,
                "type": "release",
                "format": request.media_type.catalog_format,
                "per_page": str(_PER_PAGE),
            }
            data = self._http.get(f"{_DISCOGS_API}/database/search", params=params)
            for candidate in parse_search_results(data, reason):
                existing = collected.get(candidate.release_id)
                if existing is None:
                    collected[candidate.release_id] = candidate
                elif reason not in existing.reason_codes:
                    collected[candidate.release_id] = _with_reason(existing, reason)

        candidates = list(collected.values())[:_MAX_CANDIDATES]
        logger.info("Discogs search found %d unique releases", len(candidates))

        hydrated = [self._hydrate(c) for c in candidates[:_HYDRATE_LIMIT]]
        return SearchResponse(candidates=hydrated + candidates[_HYDRATE_LIMIT:])

    def price(self, release_id: int) -> PriceSummary:
        """Marketplace statistics for a release.

        Lowest price and listing count come from the stats endpoint. Median and
        highest summarize the suggested prices per condition grade (which need
        an authenticated seller account) on their own; the live listing is a
        different kind of price and only sets the lowest. Without suggestions
        the live lowest is the only known price.

        Raises:
            CollaboratorError: When the stats endpoint fails.
        """
        stats = self._http.get(f"{_DISCOGS_API}/marketplace/stats/{release_id}")
        lowest, num_for_sale = parse_marketplace_stats(stats)

        suggested: list[float] = []
        try:
            suggestions = self._http.get(
                f"{_DISCOGS_API}/marketplace/price_suggestions/{release_id}"
            )
        except CollaboratorError as exc:
            logger.warning("Price suggestions unavailable for %d: %s", release_id, exc)
        else:
            suggested = parse_price_suggestions(suggestions)

        known = suggested or ([lowest] if lowest is not None else [])
        summary = summarize_prices(known, num_for_sale=num_for_sale)
        if lowest is not None:
            summary = replace(summary, lowest=lowest)
        return summary

    def _queries(self, request: SearchRequest) -> list[tuple[dict[str, str], str]]:
        signals = request.signals
        queries: list[tuple[dict[str, str], str]] = []
        if signals.barcode:
            digits = normalize_barcode(signals.barcode)
            if digits:
                queries.append(({"barcode": digits}, BARCODE_SEARCH))
        if signals.catalog_number:
            queries.append(({"catno": signals.catalog_number.strip()}, CATNO_SEARCH))
        if signals.matrix_number:
            for term in matrix_search_terms(signals.matrix_number)[:_MAX_MATRIX_QUERIES]:
                queries.append(({"q": term}, MATRIX_SEARCH))
        if (request.manual or not queries) and (signals.artist or signals.title):
            params: dict[str, str] = {}
            if signals.artist:
                params["artist"] = signals.artist
            if signals.title:
                params["release_title"] = signals.title
            queries.append((params, TEXT_SEARCH))
        return queries

    def _hydrate(self, candidate: Candidate) -> Candidate:
        """Fetch the full release for its identifiers; keep the search data on failure."""
        try:
            data = self._http.get(f"{_DISCOGS_API}/releases/{candidate.release_id}")
        except CollaboratorError as exc:
            logger.warning("Release fetch failed for %d: %s", candidate.release_id, exc)
            return candidate
        if not isinstance(data.get("id"), int):
            logger.warning("Release %d returned no usable data", candidate.release_id)
            return candidate
        release = parse_release(data, reason_codes=candidate.reason_codes)
        if not release.barcodes and candidate.barcodes:
            return _with_barcodes(release, candidate.barcodes)
        return release


def _with_reason(candidate: Candidate, reason: str) -> Candidate:
    return replace(candidate, reason_codes=(*candidate.reason_codes, reason))


def _with_barcodes(candidate: Candidate, barcodes: tuple[str, ...]) -> Candidate:
    return replace(candidate, barcodes=barcodes)
