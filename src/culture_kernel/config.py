"""
Runtime configuration.

Each setting resolves as: explicit value, then environment variable, then
default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .kernel.errors import ConfigError
from .kernel.source import bundled_source_path
from .kernel.store import DEFAULT_TIMEOUT

ENV_DB = "CULTURE_DB"
ENV_SOURCE = "CULTURE_RITUALS"
ENV_HOST = "CULTURE_HOST"
ENV_PORT = "CULTURE_PORT"
ENV_TIMEOUT = "CULTURE_DB_TIMEOUT"
ENV_LOG_LEVEL = "CULTURE_LOG_LEVEL"

DEFAULT_DB_NAME = "culture.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


@dataclass
class KernelConfig:
    """Settings shared by the CLI verbs and the HTTP app."""

    db_path: str
    source_path: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        db: Optional[str] = None,
        source: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> "KernelConfig":
        return cls(
            db_path=resolve_db_path(db),
            source_path=resolve_source_path(source),
            host=host or os.environ.get(ENV_HOST) or DEFAULT_HOST,
            port=port if port is not None else _env_number(ENV_PORT, int, DEFAULT_PORT),
            timeout=_env_number(ENV_TIMEOUT, float, DEFAULT_TIMEOUT),
            log_level=_env_log_level(),
        )


def resolve_db_path(explicit: Optional[str]) -> str:
    """
    Resolve database path:
    1. Explicit flag
    2. Environment variable CULTURE_DB
    3. Default: culture.db in current directory
    """
    if explicit:
        return explicit

    env_db = os.environ.get(ENV_DB)
    if env_db:
        return env_db

    return str(Path.cwd() / DEFAULT_DB_NAME)


def resolve_source_path(explicit: Optional[str]) -> str:
    """
    Resolve the definition source:
    1. Explicit flag
    2. Environment variable CULTURE_RITUALS
    3. The rituals.json bundled with the package
    """
    if explicit:
        return explicit

    env_source = os.environ.get(ENV_SOURCE)
    if env_source:
        return env_source

    return str(bundled_source_path())


def _env_number(name: str, kind: type, default):
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigError(f"{name}={raw!r} is not a valid {kind.__name__}") from e


def _env_log_level() -> str:
    level = (os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{ENV_LOG_LEVEL}={level!r} is not a logging level")
    return level
