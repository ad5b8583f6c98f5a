"""TOML-based watch configuration.

Loads ~/.clusterwait/defaults.toml (global) and clusterwait.toml (project),
merges them, and resolves the result into WaitSettings.

Example clusterwait.toml::

    [eks]
    region = "us-west-2"

    [wait]
    initial_wait = 90
    poll_interval = 10
    timeout = 1800

    [log]
    level = "DEBUG"
    file = "logs/clusterwait.log"
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .cancellation import Cancellation
from .constants import DEFAULT_INITIAL_WAIT, DEFAULT_POLL_INTERVAL
from .core.exceptions import ConfigurationError
from .observability.logging import LOG_LEVELS, LogConfig
from .providers.eks.config import EKS

RawConfig = dict[str, Any]

GLOBAL_CONFIG_PATH = Path.home() / ".clusterwait" / "defaults.toml"
PROJECT_CONFIG_NAME = "clusterwait.toml"


@dataclass(frozen=True, slots=True)
class WaitSettings:
    """Resolved settings for EKS watches.

    Args:
        eks: EKS connection configuration.
        initial_wait: Grace period in seconds after the first observation.
        poll_interval: Seconds between observations.
        timeout: Overall wait horizon in seconds. None waits indefinitely.
        log: Logging handlers to install with ``setup_logging``.
    """

    eks: EKS = field(default_factory=EKS)
    initial_wait: float = DEFAULT_INITIAL_WAIT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    timeout: float | None = None
    log: LogConfig = field(default_factory=LogConfig)

    def cancellation(self) -> Cancellation:
        """Create a cancellation trigger honouring ``timeout``."""
        return Cancellation(timeout=self.timeout)


def _deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> RawConfig:
    if not path.is_file():
        return {}
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def load_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> RawConfig:
    global_cfg = _read_toml(global_path or GLOBAL_CONFIG_PATH)
    project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    project_cfg = _read_toml(project_path)

    merged = _deep_merge(global_cfg, project_cfg)
    merged.setdefault("eks", {})
    merged.setdefault("wait", {})
    merged.setdefault("log", {})
    return merged


def _optional_seconds(raw: RawConfig, key: str) -> float | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"wait.{key} must be a number of seconds, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"wait.{key} must be >= 0, got {value}")
    return float(value)


def _seconds(raw: RawConfig, key: str, default: float) -> float:
    value = _optional_seconds(raw, key)
    return default if value is None else value


def _log_config(raw: RawConfig) -> LogConfig:
    unknown = set(raw) - {"level", "console", "file", "rotation", "retention"}
    if unknown:
        raise ConfigurationError(f"Unknown log settings: {', '.join(sorted(unknown))}")

    level = str(raw.get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"log.level must be one of {', '.join(LOG_LEVELS)}, got {raw['level']!r}")

    retention = raw.get("retention", 5)
    if isinstance(retention, bool) or not isinstance(retention, int) or retention < 0:
        raise ConfigurationError(f"log.retention must be a non-negative integer, got {retention!r}")

    return LogConfig(
        level=level,  # type: ignore[arg-type]
        console=bool(raw.get("console", True)),
        file=raw.get("file"),
        rotation=str(raw.get("rotation", "20 MB")),
        retention=retention,
    )


def load_settings(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> WaitSettings:
    config = load_config(project_dir=project_dir, global_path=global_path)

    raw_eks = dict(config["eks"])
    unknown = set(raw_eks) - {"region", "profile", "endpoint_url"}
    if unknown:
        raise ConfigurationError(f"Unknown eks settings: {', '.join(sorted(unknown))}")

    raw_wait = config["wait"]
    return WaitSettings(
        eks=EKS(**raw_eks),
        initial_wait=_seconds(raw_wait, "initial_wait", DEFAULT_INITIAL_WAIT),
        poll_interval=_seconds(raw_wait, "poll_interval", DEFAULT_POLL_INTERVAL),
        timeout=_optional_seconds(raw_wait, "timeout"),
        log=_log_config(config["log"]),
    )
