"""Lenient value coercion for loosely-typed JSON payloads."""

from __future__ import annotations

import math


def safe_int(value: object) -> int | None:
    """Convert *value* to ``int`` or return ``None``.

    Accepts ints, floats and numeric strings.  Booleans, NaN and
    infinities are rejected; none of them is a usable count.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip().replace(",", ""))
        except ValueError:
            return None
    return None


def safe_str(value: object, default: str = "") -> str:
    """Return *value* as a string, or *default* for ``None``/non-scalars."""
    if value is None:
        return default
    if isinstance(value, (str, int, float)):
        return str(value)
    return default
