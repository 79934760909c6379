# ABOUTME: Parsing functions for Discogs API JSON responses.
# ABOUTME: Converts search results, releases, and marketplace payloads into pressmatch types.

import re
from typing import Any

from pressmatch.matching.candidate import Candidate

MATRIX_IDENTIFIER = "Matrix / Runout"
BARCODE_IDENTIFIER = "Barcode"
RIGHTS_SOCIETY_IDENTIFIER = "Rights Society"
SID_IDENTIFIERS = frozenset({"Mastering SID Code", "Mould SID Code"})

# Discogs disambiguates artist names with a numeric suffix: "Nirvana (2)".
_ARTIST_SUFFIX_RE = re.compile(r"\s*\(\d+\)$")


def _clean_artist(name: str) -> str:
    return _ARTIST_SUFFIX_RE.sub("", name.strip())


def _year(value: Any) -> int | None:
    """Discogs sends years as int or str, with 0 / "" for unknown."""
    try:
        year = int(value)
    except (TypeError, ValueError):
        return None
    return year or None


def _split_search_title(title: str) -> tuple[str | None, str]:
    """Search results title releases as 'Artist - Title'."""
    if " - " in title:
        artist, _, rest = title.partition(" - ")
        return _clean_artist(artist), rest.strip()
    return None, title.strip()


def parse_search_results(data: dict[str, Any], reason: str) -> list[Candidate]:
    """Parse a /database/search response into lightweight candidates.

    Search results lack identifiers (matrix, SID, rights society); those are
    filled in by hydrating the release. reason records which query found it.
    """
    candidates: list[Candidate] = []
    for result in data.get("results") or []:
        release_id = result.get("id")
        if not isinstance(release_id, int):
            continue
        artist, title = _split_search_title(result.get("title") or "")
        labels = result.get("label") or []
        formats = result.get("format") or []
        candidates.append(
            Candidate(
                release_id=release_id,
                title=title or None,
                artist=artist,
                label=labels[0] if labels else None,
                catalog_number=result.get("catno") or None,
                country=result.get("country") or None,
                year=_year(result.get("year")),
                format=formats[0] if formats else None,
                reason_codes=(reason,),
                barcodes=tuple(result.get("barcode") or ()),
            )
        )
    return candidates


def parse_release(data: dict[str, Any], reason_codes: tuple[str, ...] = ()) -> Candidate:
    """Parse a /releases/{id} response into a fully identified candidate."""
    artists = data.get("artists") or []
    artist = data.get("artists_sort") or (artists[0].get("name") if artists else None)

    labels = data.get("labels") or []
    label = labels[0].get("name") if labels else None
    catno = labels[0].get("catno") if labels else None
    if catno and catno.lower() == "none":
        catno = None

    formats = data.get("formats") or []

    matrix_numbers: list[str] = []
    barcodes: list[str] = []
    sid_codes: list[str] = []
    societies: set[str] = set()
    for identifier in data.get("identifiers") or []:
        kind = identifier.get("type", "")
        value = (identifier.get("value") or "").strip()
        if not value:
            continue
        if kind == MATRIX_IDENTIFIER:
            matrix_numbers.append(value)
        elif kind == BARCODE_IDENTIFIER:
            barcodes.append(value)
        elif kind in SID_IDENTIFIERS:
            sid_codes.append(value)
        elif kind == RIGHTS_SOCIETY_IDENTIFIER:
            societies.add(value.upper())

    return Candidate(
        release_id=int(data["id"]),
        title=data.get("title"),
        artist=_clean_artist(artist) if artist else None,
        label=label,
        catalog_number=catno,
        country=data.get("country") or None,
        year=_year(data.get("year")),
        format=formats[0].get("name") if formats else None,
        reason_codes=reason_codes,
        rights_society_tags=frozenset(societies),
        matrix_numbers=tuple(matrix_numbers),
        barcodes=tuple(barcodes),
        sid_codes=tuple(sid_codes),
    )


def _price_value(entry: Any) -> float | None:
    if isinstance(entry, dict):
        value = entry.get("value")
        if isinstance(value, int | float):
            return float(value)
    return None


def parse_marketplace_stats(data: dict[str, Any]) -> tuple[float | None, int]:
    """Extract (lowest price, number for sale) from /marketplace/stats."""
    lowest = _price_value(data.get("lowest_price"))
    num_for_sale = data.get("num_for_sale") or 0
    return lowest, int(num_for_sale)


def parse_price_suggestions(data: dict[str, Any]) -> list[float]:
    """Extract the suggested price per condition grade as a flat list."""
    prices: list[float] = []
    for entry in data.values():
        value = _price_value(entry)
        if value is not None:
            prices.append(value)
    return prices
