"""
Concurrent hop resolution
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from .models import GeoLookupError, LocationRecord
from .parser import iter_hop_lines, parse_hop_line
from .sink import ResultSink, SinkClosedError, SinkFullError


logger = logging.getLogger(__name__)


class Resolver(Protocol):
    async def resolve(self, ip: str) -> Optional[LocationRecord]: ...


@dataclass
class PipelineStats:
    """Counters for one pipeline run"""
    lines: int = 0
    skipped: int = 0
    local: int = 0
    failed: int = 0
    resolved: int = 0
    refused: int = 0


class ResolutionPipeline:
    """
    Resolve traceroute hops concurrently into a ResultSink.

    Each hop line with a usable address becomes one independent task;
    timeouts and malformed lines never get one. A semaphore caps how many
    lookups are in flight at once. Failed lookups are dropped without
    surfacing an error.
    """

    def __init__(self, resolver: Resolver, sink: ResultSink, concurrency: int = 16):
        self.resolver = resolver
        self.sink = sink
        self.stats = PipelineStats()
        self._semaphore = asyncio.Semaphore(concurrency)

    async def resolve_address(self, ip: str) -> Optional[LocationRecord]:
        """
        Resolve and publish a single hop address.

        Returns:
            The published record, or None if the hop was dropped
        """
        async with self._semaphore:
            try:
                record = await self.resolver.resolve(ip)
            except GeoLookupError as e:
                self.stats.failed += 1
                logger.debug("Dropping hop: %s", e)
                return None

        if record is None:
            self.stats.local += 1
            return None

        try:
            await self.sink.push(record)
        except (SinkFullError, SinkClosedError) as e:
            self.stats.refused += 1
            logger.warning("Result for %s not delivered: %s", ip, e)
            return None

        self.stats.resolved += 1
        return record

    def _parse(self, line: str) -> Optional[str]:
        self.stats.lines += 1
        ip = parse_hop_line(line)
        if ip is None:
            self.stats.skipped += 1
        return ip

    async def resolve_line(self, line: str) -> Optional[LocationRecord]:
        """Parse one hop line and resolve its address in place"""
        ip = self._parse(line)
        if ip is None:
            return None
        return await self.resolve_address(ip)

    def _spawn(self, line: str, tasks: list[asyncio.Task]):
        """Start a lookup task, unless the line has no usable address"""
        ip = self._parse(line)
        if ip is not None:
            tasks.append(asyncio.create_task(self.resolve_address(ip)))

    @staticmethod
    def _start_reader(lines: Iterable[str]) -> asyncio.Queue:
        """
        Read hop lines on a daemon thread into an asyncio queue.

        The queue ends with None, or with the exception that stopped the
        read. A daemon thread blocked on stdin does not hold up exit.
        """
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        def publish(item):
            try:
                loop.call_soon_threadsafe(queue.put_nowait, item)
            except RuntimeError:
                # loop already closed; nobody is listening
                return False
            return True

        def read():
            try:
                for line in iter_hop_lines(lines):
                    if not publish(line):
                        return
            except Exception as e:
                publish(e)
                return
            publish(None)

        threading.Thread(target=read, name='tracevis-input', daemon=True).start()
        return queue

    @staticmethod
    async def _next_line(queue: asyncio.Queue) -> Optional[str]:
        item = await queue.get()
        if isinstance(item, Exception):
            raise item
        return item

    async def run(self, lines: Iterable[str]) -> PipelineStats:
        """
        Streaming run: spawn a task per usable line as lines arrive.

        Blocking reads happen on a reader thread so the event loop keeps
        serving lookups and the display. The sink is closed once input is
        exhausted and every task has finished.
        """
        tasks: list[asyncio.Task] = []
        try:
            queue = self._start_reader(lines)
            while True:
                line = await self._next_line(queue)
                if line is None:
                    break
                self._spawn(line, tasks)
            await asyncio.gather(*tasks)
        finally:
            if not self.sink.closed:
                await self.sink.close()

        self._log_summary()
        return self.stats

    async def run_batch(self, lines: Iterable[str]) -> list[LocationRecord]:
        """
        Batch run: read everything, resolve everything, return all records.

        The sink must be unbounded (capacity 0) since nothing consumes it
        until every task has finished.
        """
        queue = self._start_reader(lines)
        hop_lines = []
        while True:
            line = await self._next_line(queue)
            if line is None:
                break
            hop_lines.append(line)

        tasks: list[asyncio.Task] = []
        for line in hop_lines:
            self._spawn(line, tasks)

        await asyncio.gather(*tasks)
        await self.sink.close()
        self._log_summary()
        return self.sink.drain()

    def _log_summary(self):
        s = self.stats
        logger.info(
            "Processed %d hops: %d resolved, %d local, %d unusable, %d failed, %d undelivered",
            s.lines, s.resolved, s.local, s.skipped, s.failed, s.refused,
        )
