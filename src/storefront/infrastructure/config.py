"""Runtime settings, read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from storefront.domain.exceptions import ValidationError

# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json")
_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class Settings:
    database_url: str = f"sqlite:///{_DATA_DIR / 'storefront.db'}"
    echo_sql: bool = False
    log_level: str = "INFO"
    log_format: str = "console"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = Settings()

        log_level = env.get("STOREFRONT_LOG_LEVEL", defaults.log_level).upper()
        if log_level not in _LOG_LEVELS:
            raise ValidationError(f"Invalid STOREFRONT_LOG_LEVEL: {log_level!r}")

        log_format = env.get("STOREFRONT_LOG_FORMAT", defaults.log_format).lower()
        if log_format not in _LOG_FORMATS:
            raise ValidationError(f"Invalid STOREFRONT_LOG_FORMAT: {log_format!r}")

        return Settings(
            database_url=env.get("STOREFRONT_DATABASE_URL") or defaults.database_url,
            echo_sql=_parse_bool("STOREFRONT_ECHO_SQL", env.get("STOREFRONT_ECHO_SQL", "")),
            log_level=log_level,
            log_format=log_format,
        )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValidationError(f"Invalid {name}: {raw!r}")
