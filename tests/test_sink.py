"""
Tests for the result conduit
"""

import asyncio

import pytest

from conftest import make_record
from tracevis.sink import ResultSink, SinkClosedError, SinkFullError


def test_records_come_out_in_push_order():
    async def go():
        sink = ResultSink(capacity=4)
        for i in range(3):
            await sink.push(make_record(address=f"8.8.8.{i}"))
        await sink.close()
        return [r.address async for r in sink]

    assert asyncio.run(go()) == ["8.8.8.0", "8.8.8.1", "8.8.8.2"]


def test_get_returns_none_after_close_repeatedly():
    async def go():
        sink = ResultSink()
        await sink.close()
        return await sink.get(), await sink.get()

    assert asyncio.run(go()) == (None, None)


def test_close_only_once():
    async def go():
        sink = ResultSink()
        await sink.close()
        with pytest.raises(SinkClosedError):
            await sink.close()

    asyncio.run(go())


def test_push_after_close_is_refused():
    async def go():
        sink = ResultSink()
        await sink.close()
        with pytest.raises(SinkClosedError):
            await sink.push(make_record())
        assert sink.pushed == 0

    asyncio.run(go())


def test_full_buffer_fails_fast_after_push_timeout():
    async def go():
        sink = ResultSink(capacity=1, push_timeout=0.05)
        await sink.push(make_record(address="8.8.8.1"))
        with pytest.raises(SinkFullError):
            await sink.push(make_record(address="8.8.8.2"))
        assert sink.pushed == 1

    asyncio.run(go())


def test_full_buffer_waits_for_consumer():
    async def go():
        sink = ResultSink(capacity=1, push_timeout=1.0)
        await sink.push(make_record(address="8.8.8.1"))
        pending = asyncio.create_task(sink.push(make_record(address="8.8.8.2")))
        await asyncio.sleep(0.01)
        assert not pending.done()
        first = await sink.get()
        await pending
        second = await sink.get()
        return first.address, second.address

    assert asyncio.run(go()) == ("8.8.8.1", "8.8.8.2")


def test_close_waits_while_consumer_drains():
    async def go():
        sink = ResultSink(capacity=1)
        await sink.push(make_record())
        closing = asyncio.create_task(sink.close())
        await asyncio.sleep(0.01)
        assert sink.closed
        received = [r async for r in sink]
        await closing
        return received

    assert len(asyncio.run(go())) == 1


def test_unbounded_sink_and_drain():
    async def go():
        sink = ResultSink(capacity=0)
        for i in range(200):
            await sink.push(make_record(address=f"8.8.{i // 256}.{i % 256}"))
        await sink.close()
        records = sink.drain()
        return records, sink.drain(), await sink.get()

    records, again, after = asyncio.run(go())
    assert len(records) == 200
    assert again == []
    assert after is None
