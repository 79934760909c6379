# ABOUTME: Rights-society exclusion filter: hard veto of territorially impossible candidates.
# ABOUTME: Runs before scoring; vetoed candidates surface only as explanation strings.

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from pressmatch.errors import CoreError, ambiguous_veto
from pressmatch.matching.candidate import Candidate

logger = logging.getLogger(__name__)

# Collection society -> territory it licenses pressings for. Two societies
# are mutually exclusive when their territories differ.
SOCIETY_TERRITORIES: dict[str, str] = {
    "BUMA": "NL",
    "STEMRA": "NL",
    "SABAM": "BE",
    "SACEM": "FR",
    "SDRM": "FR",
    "GEMA": "DE",
    "MCPS": "UK",
    "PRS": "UK",
    "JASRAC": "JP",
    "ASCAP": "US",
    "BMI": "US",
    "HFA": "US",
    "SESAC": "US",
    "SGAE": "ES",
    "SIAE": "IT",
    "AKM": "AT",
    "AUME": "AT",
    "SUISA": "CH",
    "NCB": "NORDIC",
    "STIM": "NORDIC",
    "KODA": "NORDIC",
    "TONO": "NORDIC",
    "TEOSTO": "NORDIC",
    "APRA": "AU",
    "AMCOS": "AU",
    "CMRRA": "CA",
    "SOCAN": "CA",
}

# Umbrella marks printed alongside a national society; they never conflict.
NEUTRAL_SOCIETIES = frozenset({"BIEM"})

_TAG_SPLIT_RE = re.compile(r"[/,&+\-\s]+")


@dataclass(frozen=True)
class Exclusion:
    """A vetoed candidate and the human-readable reason."""

    candidate: Candidate
    reason: str


@dataclass
class ExclusionResult:
    """Partition of the input: every candidate lands in exactly one list."""

    retained: list[Candidate] = field(default_factory=list)
    excluded: list[Exclusion] = field(default_factory=list)
    warnings: list[CoreError] = field(default_factory=list)


def split_society_tags(tags: frozenset[str] | set[str] | list[str]) -> set[str]:
    """Split composite marks like 'BIEM/STEMRA' or 'BUMA-STEMRA' into societies."""
    societies: set[str] = set()
    for tag in tags:
        for part in _TAG_SPLIT_RE.split(tag.upper()):
            if part:
                societies.add(part)
    return societies


def _territories(
    societies: set[str], table: Mapping[str, str]
) -> dict[str, set[str]]:
    """Territory -> societies that put it there, ignoring neutral and unknown marks."""
    by_territory: dict[str, set[str]] = {}
    for society in societies:
        if society in NEUTRAL_SOCIETIES:
            continue
        territory = table.get(society)
        if territory is None:
            continue
        by_territory.setdefault(territory, set()).add(society)
    return by_territory


def apply(
    candidates: list[Candidate],
    declared: frozenset[str] | set[str],
    table: Mapping[str, str] = SOCIETY_TERRITORIES,
) -> ExclusionResult:
    """Veto candidates whose rights societies conflict with the declared ones.

    A candidate is excluded only when every territory its known societies
    point to differs from every territory the declared societies point to.
    Missing information on either side is never treated as a conflict. A
    candidate whose own tags span several territories is kept and flagged.
    """
    result = ExclusionResult()
    declared_territories = _territories(split_society_tags(declared), table)
    if not declared_territories:
        result.retained = list(candidates)
        return result

    declared_label = _describe(declared_territories)
    for candidate in candidates:
        own = _territories(split_society_tags(candidate.rights_society_tags), table)
        if not own:
            result.retained.append(candidate)
            continue

        if len(own) > 1:
            message = (
                f"Release {candidate.release_id} carries contradictory rights "
                f"societies {_describe(own)}; kept for review"
            )
            logger.warning(message)
            result.warnings.append(ambiguous_veto(message))
            result.retained.append(candidate)
            continue

        if own.keys() & declared_territories.keys():
            result.retained.append(candidate)
            continue

        reason = (
            f"Release {candidate.release_id} ({candidate.display_name}) excluded: "
            f"rights society {_describe(own)} conflicts with {declared_label} on the media"
        )
        logger.debug(reason)
        result.excluded.append(Exclusion(candidate=candidate, reason=reason))

    return result


def _describe(by_territory: dict[str, set[str]]) -> str:
    parts = [
        f"{'/'.join(sorted(societies))} ({territory})"
        for territory, societies in sorted(by_territory.items())
    ]
    return ", ".join(parts)
