"""Client configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "yelix_cloud.log"

DEFAULT_BASE_URL = "https://backend.yelix.deno.net"
DEFAULT_MAX_QUEUE_SIZE = 1000
DEFAULT_TIMEOUT = 10.0

_TRUTHY = {"1", "true", "yes", "on"}


def resolve_base_url(value: str | None = None) -> str:
    """Resolve the collector base URL, falling back to the hosted default."""
    if not value:
        return DEFAULT_BASE_URL
    return value.rstrip("/")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class ClientSettings:
    """Settings for a YelixCloud client."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    debug: bool = False
    max_queue_size: int | None = DEFAULT_MAX_QUEUE_SIZE  # None = unbounded
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("API key is required to initialize YelixCloud")
        self.base_url = resolve_base_url(self.base_url)
        if self.max_queue_size is not None and self.max_queue_size <= 0:
            raise ConfigurationError("max_queue_size must be positive or None")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """
        Build settings from YELIX_* environment variables.

        YELIX_MAX_QUEUE_SIZE=0 disables the queue bound.
        """
        max_queue_size: int | None = _env_int(
            "YELIX_MAX_QUEUE_SIZE", DEFAULT_MAX_QUEUE_SIZE
        )
        if max_queue_size == 0:
            max_queue_size = None

        return cls(
            api_key=os.getenv("YELIX_API_KEY", ""),
            base_url=resolve_base_url(os.getenv("YELIX_BASE_URL")),
            debug=os.getenv("YELIX_DEBUG", "").strip().lower() in _TRUTHY,
            max_queue_size=max_queue_size,
            timeout=_env_float("YELIX_TIMEOUT", DEFAULT_TIMEOUT),
        )
