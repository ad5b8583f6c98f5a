import asyncio

import pytest

from clusterwait.stream import EventStream, StreamClosedError
from clusterwait.types import EventKind, StatusEvent

pytestmark = [pytest.mark.unit, pytest.mark.timeout(30)]


def failure() -> StatusEvent:
    return StatusEvent(EventKind.QUERY_ERROR, error=RuntimeError("boom"))


@pytest.mark.asyncio
async def test_send_blocks_when_full_until_consumed():
    stream = EventStream(capacity=1)
    await stream.send(failure())

    blocked = asyncio.create_task(stream.send(failure()))
    await asyncio.sleep(0.05)
    assert not blocked.done()

    await anext(stream)
    await asyncio.wait_for(blocked, timeout=1)
    assert len(stream) == 1


@pytest.mark.asyncio
async def test_close_does_not_wait_for_capacity():
    stream = EventStream(capacity=1)
    await stream.send(failure())
    await asyncio.wait_for(stream.close(), timeout=1)

    events = await stream.collect()
    assert len(events) == 1


@pytest.mark.asyncio
async def test_close_is_exactly_once():
    stream = EventStream()
    await stream.close()
    with pytest.raises(StreamClosedError):
        await stream.close()
    with pytest.raises(StreamClosedError):
        await stream.send(failure())


@pytest.mark.asyncio
async def test_send_final_exceeds_capacity_and_wakes_consumer():
    stream = EventStream(capacity=1)
    await stream.send(failure())
    consumer = asyncio.create_task(stream.collect())
    await asyncio.sleep(0.01)

    stream.send_final(StatusEvent(EventKind.ABSENT))
    events = await asyncio.wait_for(consumer, timeout=1)

    assert [e.kind for e in events] == [EventKind.QUERY_ERROR, EventKind.ABSENT]
    assert stream.closed


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        EventStream(capacity=0)
