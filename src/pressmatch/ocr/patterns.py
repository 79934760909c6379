# ABOUTME: Pattern-aware reading of runout / inner-ring text beyond single characters.
# ABOUTME: Repairs misread IFPI marks and plant names, then pulls out SID codes and catalog numbers.

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PatternFix:
    """One text-level repair made before codes were extracted."""

    original: str
    corrected: str
    reason: str


@dataclass
class RunoutCodes:
    """Codes found in a runout reading.

    text is the repaired reading the codes were taken from. Mastering SID
    codes are the IFPI L-codes; every other IFPI code is taken as a mould SID.
    """

    text: str
    fixes: list[PatternFix] = field(default_factory=list)
    ifpi_mastering: list[str] = field(default_factory=list)
    ifpi_mould: list[str] = field(default_factory=list)
    catalog_numbers: list[str] = field(default_factory=list)
    plants: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.ifpi_mastering or self.ifpi_mould or self.catalog_numbers or self.plants
        )


_IFPI_VARIANT_RE = re.compile(r"1FP1|LFPL|1FPI|IFP1|IFPL|LFPI")

# Misread plant names, each with the name it should be.
_PLANT_FIXES = [
    (re.compile(r"PD0"), "PDO"),
    (re.compile(r"S[O0]N[O0]PRE[S5]{2}|5[O0]N[O0]PRE[S5]{2}"), "SONOPRESS"),
    (re.compile(r"EM1|3MI"), "EMI"),
    (re.compile(r"PH[1I]L[1I]PS"), "PHILIPS"),
    (re.compile(r"CAP[1I]T[O0]L"), "CAPITOL"),
    (re.compile(r"N[1I]MBU[S5]"), "NIMBUS"),
]

# Between a letter prefix and a run of digits, O, I and S are digits.
_CATNO_CONFUSED_RE = re.compile(r"\b([A-Z]{2,4})[\s-]*([OIS]{1,2})(\d{3,6})")
_CATNO_DIGITS = str.maketrans("OIS", "015")

_IFPI_CODE_RE = re.compile(r"\bIFPI\s*([A-Z0-9]{4,5})\b")
_CATNO_RE = re.compile(r"\b([A-Z]{2,4})[\s-]*(\d{4,8})\b")
_PLANT_RE = re.compile(
    r"\b(PDO|SONOPRESS|MPO|EMI|NIMBUS|DAMONT|SANYO|JVC|PHILIPS|CAPITOL|JACKSONVILLE|JAX)\b"
)


def _unique(values: list[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def repair_runout(raw: str) -> tuple[str, list[PatternFix]]:
    """Uppercase raw and repair misreads that only make sense in context.

    Single-character confusables are left to the verification session; this
    handles whole marks: IFPI read as 1FP1 and similar, letters inside a
    catalog number's digits, and known plant names.
    """
    text = raw.upper().strip()
    fixes: list[PatternFix] = []

    def ifpi(match: re.Match[str]) -> str:
        fixes.append(PatternFix(match.group(0), "IFPI", "IFPI mark"))
        return "IFPI"

    text = _IFPI_VARIANT_RE.sub(ifpi, text)

    def catno(match: re.Match[str]) -> str:
        prefix, confused, digits = match.groups()
        if prefix == "IFPI":
            return match.group(0)
        corrected = f"{prefix}-{confused.translate(_CATNO_DIGITS)}{digits}"
        fixes.append(PatternFix(match.group(0), corrected, "catalog number digits"))
        return corrected

    text = _CATNO_CONFUSED_RE.sub(catno, text)

    for pattern, name in _PLANT_FIXES:

        def plant(match: re.Match[str], name: str = name) -> str:
            fixes.append(PatternFix(match.group(0), name, "pressing plant name"))
            return name

        text = pattern.sub(plant, text)

    return text, fixes


def read_runout(raw: str) -> RunoutCodes:
    """Repair a runout reading and extract the codes it carries."""
    text, fixes = repair_runout(raw)
    codes = RunoutCodes(text=text, fixes=fixes)

    for code in _IFPI_CODE_RE.findall(text):
        sid = f"IFPI {code}"
        if code.startswith("L"):
            codes.ifpi_mastering.append(sid)
        else:
            codes.ifpi_mould.append(sid)

    codes.catalog_numbers = [
        f"{prefix}-{digits}"
        for prefix, digits in _CATNO_RE.findall(text)
        if prefix != "IFPI"
    ]
    codes.ifpi_mastering = _unique(codes.ifpi_mastering)
    codes.ifpi_mould = _unique(codes.ifpi_mould)
    codes.catalog_numbers = _unique(codes.catalog_numbers)
    codes.plants = _unique(_PLANT_RE.findall(text))
    return codes
