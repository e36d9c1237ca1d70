"""
Coercion helpers shared by the snapshot record models.

Source rows arrive from an external store with nulls, strings where numbers
are expected, and the occasional garbage value. Every helper here maps such
input to a safe default instead of raising.
"""

import math
from typing import Any, List, Optional


def safe_float(value: Any, default: float = 0.0) -> float:
    """Safely convert a value to float."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def safe_amount(value: Any) -> float:
    """Convert a money value to a non-negative float."""
    return max(0.0, safe_float(value))


def safe_int(value: Any, default: int = 0) -> int:
    """Safely convert a value to int (floats are truncated)."""
    return int(safe_float(value, float(default)))


def safe_text(value: Any) -> str:
    """Convert a value to a string; None becomes empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def optional_text(value: Any) -> Optional[str]:
    """Like safe_text but keeps 'absent' distinct: None or blank -> None."""
    text = safe_text(value)
    return text if text.strip() else None


def text_list(value: Any) -> List[str]:
    """Coerce a list-ish value to a list of strings, dropping nulls."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    try:
        return [safe_text(v) for v in value if v is not None]
    except TypeError:
        return []
