"""
Result conduit between lookup tasks and the display
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from .models import LocationRecord


logger = logging.getLogger(__name__)

_CLOSED = object()


class SinkClosedError(Exception):
    """Raised when pushing to, or closing, an already closed sink"""


class SinkFullError(Exception):
    """Raised when a result could not be buffered in time"""


class ResultSink:
    """
    Many-producer, single-consumer queue of LocationRecord.

    A full buffer applies bounded back-pressure: a producer waits at most
    ``push_timeout`` seconds and then gets SinkFullError instead of
    blocking forever. ``capacity=0`` makes the buffer unbounded.

    Records come out in the order they were pushed; there is no ordering
    between producers.
    """

    def __init__(self, capacity: int = 64, push_timeout: float = 5.0):
        self.capacity = capacity
        self.push_timeout = push_timeout
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=capacity)
        self._closed = False
        self._finished = False
        self.pushed = 0

    @property
    def closed(self) -> bool:
        return self._closed

    async def push(self, record: LocationRecord):
        """
        Hand a record to the consumer.

        Raises:
            SinkClosedError: The sink was already closed
            SinkFullError: The buffer stayed full for push_timeout seconds
        """
        if self._closed:
            raise SinkClosedError("push after close")

        try:
            self._queue.put_nowait(record)
        except asyncio.QueueFull:
            logger.debug("Result buffer full, waiting up to %.1fs", self.push_timeout)
            try:
                await asyncio.wait_for(self._queue.put(record), self.push_timeout)
            except asyncio.TimeoutError:
                raise SinkFullError(f"buffer of {self.capacity} stayed full") from None
        self.pushed += 1

    async def close(self):
        """
        Signal end of data. May only be called once.

        Waits for buffer space when the consumer is behind.
        """
        if self._closed:
            raise SinkClosedError("sink already closed")
        self._closed = True
        await self._queue.put(_CLOSED)

    async def get(self) -> Optional[LocationRecord]:
        """Next record, or None once the sink is closed and drained"""
        if self._finished:
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            self._finished = True
            return None
        return item

    def drain(self) -> list[LocationRecord]:
        """Take every buffered record without waiting"""
        records = []
        while not self._finished and not self._queue.empty():
            item = self._queue.get_nowait()
            if item is _CLOSED:
                self._finished = True
                break
            records.append(item)
        return records

    async def __aiter__(self) -> AsyncIterator[LocationRecord]:
        while True:
            record = await self.get()
            if record is None:
                return
            yield record
