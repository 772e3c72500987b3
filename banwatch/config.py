"""Environment-driven settings.

Values are read from a mapping (``os.environ`` unless one is given) so the
edge handler can pass its own binding object.  Nothing here validates the
API key; the client raises :class:`~banwatch.errors.ConfigurationError` on
first use instead, so an application can start without one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_MODEL_ID = "deepseek-chat"
DEFAULT_TIMEOUT = 60.0
DEFAULT_SERVICE_NAME = "banwatch"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8787


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    v = env.get(key)
    try:
        return float(v) if v not in (None, "") else default
    except ValueError:
        return default


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    v = env.get(key)
    try:
        return int(v) if v not in (None, "") else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Remote model
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model_id: str = DEFAULT_MODEL_ID
    timeout: float = DEFAULT_TIMEOUT

    # Service
    service_name: str = DEFAULT_SERVICE_NAME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            api_key=(env.get("DEEPSEEK_API_KEY") or "").strip(),
            base_url=(env.get("DEEPSEEK_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            model_id=env.get("DEEPSEEK_MODEL_ID") or DEFAULT_MODEL_ID,
            timeout=_get_float(env, "MODERATION_TIMEOUT", DEFAULT_TIMEOUT),
            service_name=env.get("SERVICE_NAME") or DEFAULT_SERVICE_NAME,
            host=env.get("HOST") or DEFAULT_HOST,
            port=_get_int(env, "PORT", DEFAULT_PORT),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def configured(self) -> bool:
        """Return *True* if an API key is available."""
        return bool(self.api_key)
