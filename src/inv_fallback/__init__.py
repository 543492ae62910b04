"""inv-fallback — Invidious API client with ordered multi-instance fallback.

Built on ``requests`` with a strict layered architecture.
"""

import logging

from inv_fallback.version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__: list[str] = ["__version__"]
