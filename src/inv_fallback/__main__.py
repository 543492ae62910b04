"""Allow ``python -m inv_fallback`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m inv_fallback`` behaves identically to the ``inv-fallback``
console script.
"""

from __future__ import annotations

from inv_fallback.cli.app import cli

if __name__ == "__main__":
    cli()
