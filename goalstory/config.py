# =============================================================================
# goalstory/config.py  —  Gateway Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the immutable settings one gateway instance needs: where the Goal
#   Story backend lives, the bearer token to send, and the HTTP timeout.
#
# WHERE VALUES COME FROM:
#   - base URL and token: the two positional process arguments (main.py)
#   - timeout: GOALSTORY_HTTP_TIMEOUT (environment or .env), default 30s
#
#   A GatewayConfig is passed into the Dispatcher at construction time.
#   Nothing reads the base URL or token from module globals, so tests can
#   build as many independent gateways as they like.
# =============================================================================

from dataclasses import dataclass
import os
from typing import Optional


DEFAULT_TIMEOUT_SECONDS = 30.0
TIMEOUT_ENV_VAR = "GOALSTORY_HTTP_TIMEOUT"


class ConfigError(Exception):
    """Startup configuration is missing or invalid.  Fatal."""


@dataclass(frozen=True)
class GatewayConfig:
    """Connection settings for the Goal Story backend."""

    base_url: str                      # e.g. "https://api.goalstory.ing" (no trailing slash)
    token: str                         # bearer credential; never logged
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        return (
            f"GatewayConfig(base_url={self.base_url!r}, token='***', "
            f"timeout={self.timeout!r})"
        )

    __str__ = __repr__

    @classmethod
    def from_args(
        cls,
        base_url: Optional[str],
        token: Optional[str],
        timeout: Optional[float] = None,
    ) -> "GatewayConfig":
        """Validate and normalize raw startup values.

        Args:
            base_url: Backend root URL.  Surrounding whitespace and trailing
                slashes are stripped.
            token: Bearer token.  Must be non-empty.
            timeout: HTTP timeout in seconds.  Falls back to the
                GOALSTORY_HTTP_TIMEOUT environment variable, then 30s.

        Raises:
            ConfigError: if either value is missing or the timeout is not a
                positive number.
        """
        base_url = (base_url or "").strip().rstrip("/")
        token = (token or "").strip()

        if not base_url:
            raise ConfigError("GOALSTORY_API_BASE_URL argument is required")
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError(
                f"GOALSTORY_API_BASE_URL must be an http(s) URL, got {base_url!r}"
            )
        if not token:
            raise ConfigError("GOALSTORY_API_TOKEN argument is required")

        if timeout is None:
            timeout = timeout_from_env()
        if timeout <= 0:
            raise ConfigError(f"HTTP timeout must be positive, got {timeout}")

        return cls(base_url=base_url, token=token, timeout=timeout)


def timeout_from_env() -> float:
    raw = os.environ.get(TIMEOUT_ENV_VAR, "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{TIMEOUT_ENV_VAR} must be a number, got {raw!r}") from None
