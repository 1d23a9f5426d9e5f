import math
import re
from collections.abc import Iterable

# optional sign, digits, optional fraction; no exponent, no underscores
_NUMERIC_ID = re.compile(r"\s*([+-]?\d+)(?:\.\d*)?\s*", re.ASCII)


def validate_id(raw: object) -> int | None:
    """Coerce a raw identifier to an int, truncating toward zero.

    Numbers and numeric strings follow the same rule ("3.5" and 3.5 both give
    3). Booleans, non-finite numbers, exponent notation and anything
    non-numeric give None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        match = _NUMERIC_ID.fullmatch(raw)
        if match is None:
            return None
        try:
            return int(match.group(1))
        except ValueError:
            # longer than the interpreter's int-string conversion limit
            return None
    return None


def validate_ids(raw_ids: Iterable[object]) -> list[int]:
    valid, _ = partition_ids(raw_ids)
    return valid


def partition_ids(raw_ids: Iterable[object]) -> tuple[list[int], list[object]]:
    """Split raw ids into coerced valid ids and the rejected raw values, preserving order."""
    valid: list[int] = []
    rejected: list[object] = []
    for raw in raw_ids:
        coerced = validate_id(raw)
        if coerced is None:
            rejected.append(raw)
        else:
            valid.append(coerced)
    return valid, rejected


def clean_value(raw: object) -> str:
    """Normalize an extracted cell or JSON value to a stripped string ('' when absent)."""
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw.strip()
    return str(raw).strip()


def is_blank(raw: object) -> bool:
    return clean_value(raw) == ""


def dedup_key(*parts: object) -> str:
    """Case-folded composite key used for duplicate detection."""
    return "\x1f".join(clean_value(part).casefold() for part in parts)
