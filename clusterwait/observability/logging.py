"""Logging setup for clusterwait.

The library logs through loguru and stays silent until ``setup_logging``
enables it. Poll runs bind ``component``, ``resource`` and ``desired`` to
their logger; both output formats render whichever of those a record
carries, so interleaved watches can be told apart.

Example:
    settings = load_settings()
    handler_ids = setup_logging(settings.log)
    try:
        await PollEngine(strategy).wait(config)
    finally:
        teardown_logging(handler_ids)
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Literal, TextIO

from loguru import logger

logger.disable("clusterwait")

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

LOG_LEVELS: Final = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")
WATCH_KEYS: Final = ("component", "resource", "desired")


def _watch_context(record: Any) -> str:
    extra = record["extra"]
    bound = " ".join(f"{key}={extra[key]}" for key in WATCH_KEYS if key in extra)
    return f" [{bound}]" if bound else ""


def _console_format(record: Any) -> str:
    record["extra"]["watch"] = _watch_context(record)
    return "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level><dim>{extra[watch]}</dim> {message}\n{exception}"


def _file_format(record: Any) -> str:
    record["extra"]["watch"] = _watch_context(record)
    return "{time:YYYY-MM-DDTHH:mm:ss.SSSZZ} {level: <7} {name}:{line}{extra[watch]} {message}\n{exception}"


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Where clusterwait logs go.

    Loaded from the ``[log]`` section of ``clusterwait.toml``.

    Attributes:
        level: Minimum level for every handler.
        console: Log to stderr (or the ``sink`` given to ``setup_logging``).
        file: Log file path. None disables file output.
        rotation: File rotation policy (e.g. "20 MB", "1 day").
        retention: Number of rotated files to keep.
    """

    level: LogLevel = "INFO"
    console: bool = True
    file: str | None = None
    rotation: str = "20 MB"
    retention: int = 5


def setup_logging(config: LogConfig, *, sink: TextIO | None = None) -> list[int]:
    """Enable clusterwait logs and return the handler ids it added.

    Handlers installed by the application are left untouched; only records
    from ``clusterwait`` reach the handlers added here.
    """
    logger.enable("clusterwait")
    handler_ids: list[int] = []

    if config.console:
        handler_ids.append(logger.add(
            sink or sys.stderr,
            level=config.level,
            format=_console_format,
            colorize=None if sink is None else False,
            filter="clusterwait",
        ))

    if config.file:
        Path(config.file).parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(logger.add(
            config.file,
            level=config.level,
            format=_file_format,
            rotation=config.rotation,
            retention=config.retention,
            filter="clusterwait",
            diagnose=False,
        ))

    return handler_ids


def teardown_logging(handler_ids: list[int]) -> None:
    """Remove the given handlers and silence clusterwait again."""
    for hid in handler_ids:
        logger.remove(hid)
    logger.disable("clusterwait")
