"""Shared utilities — small coercion helpers used across layers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from inv_fallback.utils.coerce import safe_int, safe_str

__all__: list[str] = ["safe_int", "safe_str"]
