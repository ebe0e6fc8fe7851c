from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from vibeflow.errors import ConfigError

_ENVIRONMENTS = ("development", "production", "test")
_LOG_LEVELS = ("debug", "info", "warn", "error")


@dataclass(frozen=True)
class VibeflowConfig:
    environment: str = "development"
    host: str = "127.0.0.1"
    port: int = 3000
    cors_origin: str = "*"
    api_key: str = ""  # empty disables x-api-key authentication
    log_level: str = "info"
    theme_path: str = ""
    max_request_bytes: int = 10 * 1024 * 1024
    generated_name_prefix: str = "ExtractedItem"
    prefer_collapsed_iteration: bool = False
    minimum_repeat_count: int = 2

    def __post_init__(self) -> None:
        if self.environment not in _ENVIRONMENTS:
            raise ConfigError(
                f"environment must be one of {', '.join(_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}"
            )
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")
        if self.minimum_repeat_count < 2:
            raise ConfigError("minimum_repeat_count must be at least 2")

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cors_origins(self) -> list[str]:
        if self.cors_origin == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origin.split(",") if o.strip()]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> VibeflowConfig:
        """Build a config from ``VIBEFLOW_*`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        for field_name, kind in _ENV_FIELDS.items():
            raw = env.get(f"VIBEFLOW_{field_name.upper()}")
            if raw is None:
                continue
            kwargs[field_name] = _coerce(field_name, raw, kind)
        return cls(**kwargs)  # type: ignore[arg-type]


_ENV_FIELDS: dict[str, type] = {
    "environment": str,
    "host": str,
    "port": int,
    "cors_origin": str,
    "api_key": str,
    "log_level": str,
    "theme_path": str,
    "max_request_bytes": int,
    "generated_name_prefix": str,
    "prefer_collapsed_iteration": bool,
    "minimum_repeat_count": int,
}


def _coerce(name: str, raw: str, kind: type) -> object:
    if kind is bool:
        return raw.strip().lower() in ("true", "1", "yes")
    if kind is int:
        try:
            return int(raw)
        except ValueError:
            raise ConfigError(f"VIBEFLOW_{name.upper()} must be an integer, got {raw!r}") from None
    return raw.strip()
