# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qubitverse

"""
Configuration management.

Settings are resolved by :func:`load_config` from, in increasing order of
precedence:

1. built-in defaults,
2. the ``[qubitverse]`` table of a TOML file named by ``QUBITVERSE_CONFIG``,
3. ``QUBITVERSE_*`` environment variables.

Environment Variables
---------------------
.. code-block:: bash

    export QUBITVERSE_TRANSPORT=http
    export QUBITVERSE_SIMULATOR_URL=http://sim.local:8080
    export QUBITVERSE_SIMULATOR_CMD="./simulator --quiet"
    export QUBITVERSE_TIMEOUT=10
    export QUBITVERSE_STRICT_DECODE=1

Custom Configuration
--------------------
>>> from qubitverse.config import Config, set_config
>>> set_config(Config(transport="http", simulator_url="http://sim.local:8080"))

Resetting
---------
>>> from qubitverse.config import reset_config
>>> reset_config()  # next get_config() reloads from environment
"""

from __future__ import annotations

import logging
import os
import shlex
import threading
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

from qubitverse.errors import ConfigError


logger = logging.getLogger(__name__)


__all__ = [
    "Config",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
]


TRANSPORTS = ("process", "http")

DEFAULT_SIMULATOR_COMMAND = ("qubitverse-simulator",)
DEFAULT_SIMULATOR_URL = "http://localhost:5000/encode"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_RETRY_BACKOFF = 0.5  # seconds
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)

ENV_CONFIG_FILE = "QUBITVERSE_CONFIG"
ENV_TRANSPORT = "QUBITVERSE_TRANSPORT"
ENV_SIMULATOR_CMD = "QUBITVERSE_SIMULATOR_CMD"
ENV_SIMULATOR_URL = "QUBITVERSE_SIMULATOR_URL"
ENV_TIMEOUT = "QUBITVERSE_TIMEOUT"
ENV_RETRY_ATTEMPTS = "QUBITVERSE_RETRY_ATTEMPTS"
ENV_RETRY_BACKOFF = "QUBITVERSE_RETRY_BACKOFF"
ENV_STRICT_DECODE = "QUBITVERSE_STRICT_DECODE"
ENV_HOST = "QUBITVERSE_HOST"
ENV_PORT = "QUBITVERSE_PORT"
ENV_CORS_ORIGINS = "QUBITVERSE_CORS_ORIGINS"


@dataclass(frozen=True)
class Config:
    """
    Resolved qubitverse settings.

    Parameters
    ----------
    transport : str
        ``"process"`` to spawn the simulator locally, ``"http"`` to POST
        to a remote one.
    simulator_command : tuple of str
        Simulator executable and arguments for the process transport.
    simulator_url : str
        Endpoint for the HTTP transport.
    timeout : float
        Per-request timeout in seconds.
    retry_attempts : int
        HTTP retries for transient failures.
    retry_backoff : float
        Base HTTP retry backoff in seconds.
    strict_decode : bool
        Raise on unrecognized response lines instead of skipping them.
    host, port : str, int
        Bind address of the relay service.
    cors_origins : tuple of str
        Origins allowed to call the relay service.

    Raises
    ------
    ConfigError
        If a value is out of range.
    """

    transport: str = "process"
    simulator_command: tuple[str, ...] = DEFAULT_SIMULATOR_COMMAND
    simulator_url: str = DEFAULT_SIMULATOR_URL
    timeout: float = DEFAULT_TIMEOUT
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    strict_decode: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    def __post_init__(self) -> None:
        """Validate configuration on creation."""
        if self.transport not in TRANSPORTS:
            raise ConfigError(
                f"transport must be one of {', '.join(TRANSPORTS)}, got {self.transport!r}"
            )
        if not self.simulator_command:
            raise ConfigError("simulator_command must not be empty")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.retry_attempts < 0:
            raise ConfigError(f"retry_attempts must be >= 0, got {self.retry_attempts}")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view, for display."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


# =============================================================================
# Parsing helpers
# =============================================================================


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse a boolean env value; unset or empty gives ``default``."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_number(value: str, name: str, kind: type) -> Any:
    try:
        return kind(value.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a {kind.__name__}, got {value!r}") from None


def _parse_list(value: str | None) -> tuple[str, ...] | None:
    """Parse a comma-separated list; empty input gives ``None``."""
    if not value:
        return None
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or None


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    table = data.get("qubitverse", {})
    if not isinstance(table, dict):
        raise ConfigError(f"[qubitverse] in {path} must be a table")

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(table) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))
    values = {k: v for k, v in table.items() if k in known}
    for key in ("simulator_command", "cors_origins"):
        if key in values:
            raw = values[key]
            values[key] = tuple(shlex.split(raw)) if isinstance(raw, str) else tuple(raw)
    return values


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if env.get(ENV_TRANSPORT):
        values["transport"] = env[ENV_TRANSPORT].strip().lower()
    if env.get(ENV_SIMULATOR_CMD):
        values["simulator_command"] = tuple(shlex.split(env[ENV_SIMULATOR_CMD]))
    if env.get(ENV_SIMULATOR_URL):
        values["simulator_url"] = env[ENV_SIMULATOR_URL].strip()
    if env.get(ENV_TIMEOUT):
        values["timeout"] = _parse_number(env[ENV_TIMEOUT], ENV_TIMEOUT, float)
    if env.get(ENV_RETRY_ATTEMPTS):
        values["retry_attempts"] = _parse_number(
            env[ENV_RETRY_ATTEMPTS], ENV_RETRY_ATTEMPTS, int
        )
    if env.get(ENV_RETRY_BACKOFF):
        values["retry_backoff"] = _parse_number(
            env[ENV_RETRY_BACKOFF], ENV_RETRY_BACKOFF, float
        )
    if ENV_STRICT_DECODE in env:
        values["strict_decode"] = _parse_bool(env[ENV_STRICT_DECODE])
    if env.get(ENV_HOST):
        values["host"] = env[ENV_HOST].strip()
    if env.get(ENV_PORT):
        values["port"] = _parse_number(env[ENV_PORT], ENV_PORT, int)
    origins = _parse_list(env.get(ENV_CORS_ORIGINS))
    if origins:
        values["cors_origins"] = origins
    return values


def load_config(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> Config:
    """
    Build a :class:`Config` from file and environment.

    Parameters
    ----------
    path : Path or str, optional
        TOML file to read.  Defaults to ``$QUBITVERSE_CONFIG`` if set.
    env : mapping, optional
        Environment to read.  Defaults to ``os.environ``.

    Returns
    -------
    Config
        Resolved configuration.

    Raises
    ------
    ConfigError
        If the file is missing or malformed, or a value is invalid.
    """
    env = os.environ if env is None else env
    if path is None and env.get(ENV_CONFIG_FILE):
        path = env[ENV_CONFIG_FILE]

    config = Config()
    if path is not None:
        config = replace(config, **_read_file(Path(path).expanduser()))
        logger.debug("Loaded config file %s", path)
    return replace(config, **_from_env(env))


# =============================================================================
# Process-wide instance
# =============================================================================

_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Return the cached configuration, loading it on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def set_config(config: Config) -> None:
    """Replace the cached configuration."""
    global _config
    with _config_lock:
        _config = config


def reset_config() -> None:
    """Drop the cached configuration; the next :func:`get_config` reloads."""
    global _config
    with _config_lock:
        _config = None
