"""Key normalization for option values.

The same function builds catalog keys and per-group lookup keys for UI values,
so a raw option value always maps to exactly one key:
- Remove spaces, dots and slashes
- Transliterate ß/ä/ö/ü (ss/ae/oe/ue)
- Keep the case of every other character
"""

import re

_STRIP_PATTERN = re.compile(r"[ ./]")

_TRANSLITERATIONS = {
    "ß": "ss",
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
}

KEY_SEPARATOR = "-"


def normalize(raw: str | None) -> str:
    """Normalize a raw option value.

    Example:
        >>> normalize("Weiß / Grün 4.5")
        "WeissGruen45"
    """
    if not raw:
        return ""

    result = _STRIP_PATTERN.sub("", str(raw))
    for source, target in _TRANSLITERATIONS.items():
        result = result.replace(source, target)
    return result


def join_key(normalized_values: list[str] | tuple[str, ...]) -> str:
    """Join already-normalized values into a variant key."""
    return KEY_SEPARATOR.join(normalized_values)

