"""
ef_mapping/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

DEFAULT_LUNE_API_BASE_URL = "https://api.lune.co/v1"
DEFAULT_BASE_SOURCE = "exiobase"
DEFAULT_PUBLICATION_YEARS = "2021"
DEFAULT_REGION_EXTRA_SOURCES = "United States of America=epa"


class ConfigurationError(RuntimeError):
    """
    Raised when required configuration is missing or malformed.
    """


def load_env_files(base_dir: Path | None = None) -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    root = base_dir or Path.cwd()
    for filename in (".env", ".env.local"):
        env_path = root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_raw_env(name: str, default: str) -> str:
    """
    Read a string value; an explicitly empty variable is kept as empty.
    """

    _load_env_once()
    value = os.getenv(name)
    return default if value is None else value


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def parse_publication_years(raw: str) -> tuple[int, ...]:
    """
    Parse a comma-separated list of years, e.g. ``"2021,2022"``.
    """

    years: list[int] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            years.append(int(chunk))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid publication year: {chunk!r}") from exc
    if not years:
        raise ConfigurationError("At least one publication year must be configured.")
    return tuple(years)


def parse_region_sources(raw: str) -> dict[str, tuple[str, ...]]:
    """
    Parse ``Region=source1|source2;Other Region=source3`` into a lookup table.

    Keys are casefolded so lookups are case-insensitive.
    """

    table: dict[str, tuple[str, ...]] = {}
    for entry in raw.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        if "=" not in entry:
            raise ConfigurationError(f"Invalid region source entry (expected Region=source): {entry!r}")
        region, sources_raw = entry.split("=", 1)
        region = region.strip()
        sources = tuple(source.strip() for source in sources_raw.split("|") if source.strip())
        if not region or not sources:
            raise ConfigurationError(f"Invalid region source entry (expected Region=source): {entry!r}")
        table[region.casefold()] = sources
    return table


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for external connectors.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 5.0


@dataclass(frozen=True)
class LuneAPISettings:
    """
    Lune API connector settings.
    """

    api_key: str
    base_url: str = DEFAULT_LUNE_API_BASE_URL


@dataclass(frozen=True)
class LookupSettings:
    """
    Constraints applied to every emission factor lookup.

    ``region_extra_sources`` maps a casefolded region name to additional data
    sources searched for that region on top of ``base_source``.
    """

    limit: int = 10
    base_source: str = DEFAULT_BASE_SOURCE
    publication_years: tuple[int, ...] = (2021,)
    region_extra_sources: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: {"united states of america": ("epa",)}
    )

    def sources_for_region(self, region: str | None) -> tuple[str, ...]:
        if region is None:
            return (self.base_source,)
        extra = self.region_extra_sources.get(region.casefold(), ())
        return (self.base_source, *(source for source in extra if source != self.base_source))


@dataclass(frozen=True)
class LoggingSettings:
    """
    Logging level used when ``--verbose`` is not given.
    """

    level: str = "WARNING"


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared connector HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 30.0)),
        max_retries=max(0, _get_int_env("EXTERNAL_HTTP_MAX_RETRIES", 3)),
        backoff_initial_seconds=max(0.1, _get_float_env("EXTERNAL_HTTP_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("EXTERNAL_HTTP_BACKOFF_MULTIPLIER", 2.0)),
        rate_limit_per_second=max(0.1, _get_float_env("EXTERNAL_HTTP_RATE_LIMIT_PER_SECOND", 5.0)),
    )


@lru_cache(maxsize=1)
def get_lune_api_settings() -> LuneAPISettings:
    """
    Return Lune API settings.

    Raises ConfigurationError if no API key is configured.
    """

    api_key = _get_optional_str_env("LUNE_API_KEY") or _get_optional_str_env("API_KEY")
    if not api_key:
        raise ConfigurationError("API_KEY environment variable is required but has not been set")
    return LuneAPISettings(
        api_key=api_key,
        base_url=_get_str_env("LUNE_API_BASE_URL", DEFAULT_LUNE_API_BASE_URL),
    )


@lru_cache(maxsize=1)
def get_lookup_settings() -> LookupSettings:
    """
    Return emission factor lookup settings from environment variables.
    """

    return LookupSettings(
        limit=max(1, _get_int_env("EF_LOOKUP_LIMIT", 10)),
        base_source=_get_str_env("EF_BASE_SOURCE", DEFAULT_BASE_SOURCE),
        publication_years=parse_publication_years(
            _get_str_env("EF_PUBLICATION_YEARS", DEFAULT_PUBLICATION_YEARS)
        ),
        region_extra_sources=parse_region_sources(
            _get_raw_env("EF_REGION_EXTRA_SOURCES", DEFAULT_REGION_EXTRA_SOURCES)
        ),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """
    Return logging settings from environment variables.
    """

    return LoggingSettings(level=_get_str_env("LOG_LEVEL", "WARNING").upper())
