# ABOUTME: Static table of characters OCR commonly mistakes for one another.
# ABOUTME: Seeds correction alternatives and lets matrix comparison tolerate misreads.

# Ordered most-likely first. Symmetry is expected but not enforced.
_CONFUSABLES: dict[str, tuple[str, ...]] = {
    "0": ("O", "Q", "D"),
    "O": ("0", "Q", "D"),
    "1": ("I", "l", "7", "!"),
    "I": ("1", "l", "!"),
    "l": ("1", "I", "!"),
    "5": ("S", "6"),
    "S": ("5", "8"),
    "8": ("B", "3", "&"),
    "B": ("8", "3", "6"),
    "6": ("G", "b", "&"),
    "G": ("6", "C"),
    "2": ("Z", "?"),
    "Z": ("2", "7"),
    "9": ("g", "q"),
    "q": ("9", "g"),
    "?": ("7", "2"),
}


def lookup(character: str) -> list[str]:
    """Return the confusable alternatives for a character, most likely first.

    Unknown characters (and anything that is not a single symbol) return [].
    """
    return list(_CONFUSABLES.get(character, ()))


def merge_alternatives(character: str, extra: list[str] | tuple[str, ...] = ()) -> list[str]:
    """Union of built-in alternatives and upstream-supplied ones.

    Built-in entries come first; duplicates and the character itself are dropped.
    """
    merged: list[str] = []
    for alt in [*lookup(character), *extra]:
        if alt != character and alt not in merged:
            merged.append(alt)
    return merged


def are_confusable(a: str, b: str) -> bool:
    """Whether either character lists the other as a confusable."""
    return b in _CONFUSABLES.get(a, ()) or a in _CONFUSABLES.get(b, ())


def confusable_equal(a: str, b: str) -> bool:
    """Whether two strings differ only at positions holding confusable pairs."""
    if len(a) != len(b):
        return False
    return all(x == y or are_confusable(x, y) for x, y in zip(a, b, strict=True))
