"""Client configuration: instance list and timeouts.

Configuration is resolved once, at process start, into an immutable
:class:`ClientConfig` that is injected into the client.  Precedence is
explicit arguments, then environment variables, then defaults.

Environment variables
---------------------
``INV_FALLBACK_INSTANCES``
    Comma-separated base URLs, in trial order.
``INV_FALLBACK_TIMEOUT``
    Per-instance timeout in seconds.
``INV_FALLBACK_OVERALL_TIMEOUT``
    Optional ceiling for one whole resolution, in seconds.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from inv_fallback.core.fallback_client import (
    DEFAULT_API_PREFIX,
    DEFAULT_TIMEOUT,
    FallbackResolverClient,
)
from inv_fallback.core.models import InstanceList
from inv_fallback.core.protocols import Transport
from inv_fallback.exceptions import ConfigurationError
from inv_fallback.infra.http_transport import DEFAULT_USER_AGENT, RequestsTransport

ENV_INSTANCES = "INV_FALLBACK_INSTANCES"
ENV_TIMEOUT = "INV_FALLBACK_TIMEOUT"
ENV_OVERALL_TIMEOUT = "INV_FALLBACK_OVERALL_TIMEOUT"

DEFAULT_INSTANCES: tuple[str, ...] = (
    "https://invidious.reallyaweso.me",
    "https://iv.melmac.space",
    "https://inv.vern.cc",
    "https://y.com.sb",
    "https://invidious.nikkosphere.com",
    "https://yt.omada.cafe",
)


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable client settings."""

    instances: InstanceList
    timeout: float = DEFAULT_TIMEOUT
    overall_timeout: float | None = None
    api_prefix: str = DEFAULT_API_PREFIX
    user_agent: str = DEFAULT_USER_AGENT


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _parse_instances(raw: Sequence[str]) -> InstanceList:
    if isinstance(raw, str):
        raise ConfigurationError(
            f"Instances must be a list of URLs, not a single string: {raw!r}",
            hint="Wrap a single URL in a list or tuple.",
        )
    urls = [url.strip() for url in raw if url and url.strip()]
    if not urls:
        raise ConfigurationError(
            "Instance list must not be empty.",
            hint=f"Set {ENV_INSTANCES} or pass --instance URL.",
        )
    for url in urls:
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Invalid instance URL: {url}",
                hint="Instance URLs must start with http:// or https://",
            )
    return InstanceList(urls)


def _parse_seconds(raw: str | float, what: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{what} must be a number, got {raw!r}.") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{what} must be a positive finite number, got {value:g}.")
    return value


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def load_config(
    env: Mapping[str, str] | None = None,
    *,
    instances: Sequence[str] | None = None,
    timeout: float | None = None,
    overall_timeout: float | None = None,
) -> ClientConfig:
    """Build a :class:`ClientConfig` from arguments, *env* and defaults.

    Raises
    ------
    ConfigurationError
        If the instance list is empty or holds a non-HTTP URL, or a
        timeout is non-numeric or not positive.
    """
    env = os.environ if env is None else env

    if instances:
        instance_list = _parse_instances(instances)
    elif env.get(ENV_INSTANCES, "").strip():
        instance_list = _parse_instances(env[ENV_INSTANCES].split(","))
    else:
        instance_list = InstanceList(DEFAULT_INSTANCES)

    if timeout is not None:
        resolved_timeout = _parse_seconds(timeout, "Timeout")
    elif env.get(ENV_TIMEOUT, "").strip():
        resolved_timeout = _parse_seconds(env[ENV_TIMEOUT], "Timeout")
    else:
        resolved_timeout = DEFAULT_TIMEOUT

    resolved_overall: float | None = None
    if overall_timeout is not None:
        resolved_overall = _parse_seconds(overall_timeout, "Overall timeout")
    elif env.get(ENV_OVERALL_TIMEOUT, "").strip():
        resolved_overall = _parse_seconds(env[ENV_OVERALL_TIMEOUT], "Overall timeout")

    return ClientConfig(
        instances=instance_list,
        timeout=resolved_timeout,
        overall_timeout=resolved_overall,
    )


def build_client(
    config: ClientConfig,
    transport: Transport | None = None,
) -> FallbackResolverClient:
    """Wire a :class:`FallbackResolverClient` from *config*.

    A :class:`RequestsTransport` is created when *transport* is omitted.
    """
    if transport is None:
        transport = RequestsTransport(user_agent=config.user_agent)
    return FallbackResolverClient(
        config.instances,
        transport,
        timeout=config.timeout,
        api_prefix=config.api_prefix,
        overall_timeout=config.overall_timeout,
    )
