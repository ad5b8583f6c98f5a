from __future__ import annotations

import io
from pathlib import Path

import pytest
from loguru import logger

from clusterwait import LogConfig, PollEngine, WaitConfig, setup_logging, teardown_logging

from tests.conftest import ScriptedStrategy, status

pytestmark = [pytest.mark.unit, pytest.mark.timeout(30)]


def watch(desired: str = "ACTIVE") -> WaitConfig:
    return WaitConfig(resource_id="demo", desired_status=desired, poll_interval=0.01)


@pytest.mark.asyncio
async def test_console_lines_carry_watch_context():
    sink = io.StringIO()
    ids = setup_logging(LogConfig(level="DEBUG"), sink=sink)
    try:
        await PollEngine(ScriptedStrategy(status("CREATING"), status("ACTIVE"))).wait(watch())
    finally:
        teardown_logging(ids)

    output = sink.getvalue()
    assert "[component=poller resource=demo desired=ACTIVE]" in output
    assert "Poll | status=CREATING" in output
    assert "Desired cluster status reached: ACTIVE" in output


@pytest.mark.asyncio
async def test_level_filters_info_lines():
    sink = io.StringIO()
    ids = setup_logging(LogConfig(level="WARNING"), sink=sink)
    try:
        await PollEngine(ScriptedStrategy(ConnectionError("reset"), status("ACTIVE"))).wait(watch())
    finally:
        teardown_logging(ids)

    output = sink.getvalue()
    assert "Query failed; retrying: ConnectionError: reset" in output
    assert "Poll | status=" not in output


@pytest.mark.asyncio
async def test_file_handler_writes_context(tmp_path: Path):
    log_file = tmp_path / "logs" / "watch.log"
    ids = setup_logging(LogConfig(console=False, file=str(log_file)))
    try:
        await PollEngine(ScriptedStrategy(status("ACTIVE"))).wait(watch())
    finally:
        teardown_logging(ids)

    text = log_file.read_text()
    assert "clusterwait.engine:" in text
    assert "[component=poller resource=demo desired=ACTIVE]" in text


@pytest.mark.asyncio
async def test_logs_are_silent_after_teardown():
    sink = io.StringIO()
    ids = setup_logging(LogConfig(), sink=sink)
    teardown_logging(ids)

    extra = logger.add(sink, format="{message}")
    try:
        await PollEngine(ScriptedStrategy(status("ACTIVE"))).wait(watch())
    finally:
        logger.remove(extra)

    assert sink.getvalue() == ""
