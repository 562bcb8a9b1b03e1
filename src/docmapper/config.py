"""Runtime settings for the documentation mapper.

Values are resolved in increasing priority: built-in defaults, an optional
YAML/JSON configuration file, environment variables, then explicit overrides
(typically CLI flags). The configuration file may contain any of::

    database_url: sqlite:///documentation.db
    firecrawl_api_key: fc-...
    firecrawl_base_url: http://localhost:3002
    content_limit: 5000
    skip_docs: false
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any
from collections.abc import Mapping

import yaml

from .crawler import CONTENT_LIMIT, FIRECRAWL_BASE_URL
from .store import DEFAULT_DATABASE_URL

CONFIG_PATH_ENV_VAR = "DOCMAPPER_CONFIG"

# setting name -> environment variable
ENV_VARS = {
    "database_url": "DOCMAPPER_DATABASE_URL",
    "firecrawl_api_key": "FIRECRAWL_API_KEY",
    "firecrawl_base_url": "FIRECRAWL_BASE_URL",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    firecrawl_api_key: str | None = None
    firecrawl_base_url: str = FIRECRAWL_BASE_URL
    content_limit: int = CONTENT_LIMIT
    skip_docs: bool = False

    def __post_init__(self) -> None:
        if not self.database_url:
            raise ConfigError("'database_url' must be non-empty")
        if not self.firecrawl_base_url:
            raise ConfigError("'firecrawl_base_url' must be non-empty")
        if self.content_limit <= 0:
            raise ConfigError("'content_limit' must be a positive integer")


_FIELD_TYPES = {"content_limit": int, "skip_docs": bool}


def resolve_database_url(value: str | None) -> str:
    """Map the ``sqlite`` shorthand to the default database; pass URLs through."""
    if not value or value == "sqlite":
        return DEFAULT_DATABASE_URL
    return value


def _coerce(name: str, value: Any) -> Any:
    expected = _FIELD_TYPES.get(name, str)
    if expected is bool:
        if isinstance(value, bool):
            return value
        raise ConfigError(f"'{name}' must be a boolean")
    if expected is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise ConfigError(f"'{name}' must be an integer")
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{name}' must be a string")
    return value


def _resolve_config_path(path: Path | str | None, environ: Mapping[str, str]) -> Path | None:
    if path is not None:
        return Path(path)
    env_path = environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)
    return None


def _read_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid configuration file: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    return {key: _coerce(key, value) for key, value in data.items()}


def load_settings(
    path: Path | str | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from file, environment and explicit overrides.

    Args:
        path: Optional config file path. Falls back to ``DOCMAPPER_CONFIG``.
        overrides: Values that win over everything else; ``None`` values are ignored.
        environ: Environment mapping, ``os.environ`` by default.

    Raises:
        ConfigError: If the file is missing, unreadable or contains invalid values.
    """
    environ = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    config_path = _resolve_config_path(path, environ)
    if config_path is not None:
        values.update(_read_config_file(config_path))

    for name, env_var in ENV_VARS.items():
        env_value = environ.get(env_var)
        if env_value:
            values[name] = env_value

    for name, value in (overrides or {}).items():
        if value is not None:
            values[name] = value

    if "database_url" in values:
        values["database_url"] = resolve_database_url(values["database_url"])

    return replace(Settings(), **values)
