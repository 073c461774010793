"""
Live terminal display for TraceVis
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Sequence

import click
from rich.console import Console
from rich.live import Live

from ..models import LocationRecord
from ..sink import ResultSink
from .map_render import MapRenderer


logger = logging.getLogger(__name__)

CTRL_C = '\x03'
ESCAPE = '\x1b'
QUIT_KEYS = frozenset({'q', 'Q', CTRL_C, ESCAPE})


class DisplayState(Enum):
    """Display lifecycle"""
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    AWAITING_QUIT = "awaiting_quit"
    TERMINATED = "terminated"


def read_key() -> str:
    """Read one key from the controlling terminal, even if stdin is a pipe"""
    try:
        key = click.getchar()
    except (KeyboardInterrupt, EOFError):
        return CTRL_C
    # empty read means the terminal went away
    return key or CTRL_C


class DisplayLoop:
    """
    Owns the terminal surface and the collected records.

    Nothing else draws to the console while the loop runs; producers only
    reach it through the ResultSink.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        renderer: Optional[MapRenderer] = None,
        interactive: bool = True,
        key_reader: Callable[[], str] = read_key,
    ):
        self.console = console or Console()
        self.renderer = renderer or MapRenderer()
        self.interactive = interactive
        self.key_reader = key_reader
        self.records: list[LocationRecord] = []
        self.state = DisplayState.EMPTY
        self.history: list[DisplayState] = [DisplayState.EMPTY]
        self.frames = 0
        self._live: Optional[Live] = None

    def _set_state(self, state: DisplayState):
        if self.state is DisplayState.TERMINATED:
            raise RuntimeError("display already terminated")
        if state is not self.state:
            logger.debug("Display %s -> %s", self.state.value, state.value)
            self.state = state
            self.history.append(state)

    def _frame(self, records: Sequence[LocationRecord]):
        width, height = self.console.size
        return self.renderer.render(records, width, height)

    def redraw(self):
        """Draw the full map for every record collected so far"""
        frame = self._frame(self.records)
        if self._live is not None:
            self._live.update(frame, refresh=True)
        else:
            self.console.print(frame)
        self.frames += 1

    def render_once(self, records: Sequence[LocationRecord]):
        """Collect records and draw a single frame without a live session"""
        self.records.extend(records)
        if self.records:
            self._set_state(DisplayState.ACCUMULATING)
        self.redraw()

    async def wait_for_quit(self):
        """Block until one of the quit keys is pressed"""
        self._set_state(DisplayState.AWAITING_QUIT)
        while True:
            key = await asyncio.to_thread(self.key_reader)
            if key in QUIT_KEYS:
                return
            logger.debug("Ignoring key %r", key)

    async def run(self, sink: ResultSink) -> list[LocationRecord]:
        """
        Show records from the sink as they arrive.

        Returns once the sink is closed and, in interactive mode, after
        the quit key has been pressed.
        """
        with Live(console=self.console, screen=self.interactive,
                  auto_refresh=False, redirect_stderr=False) as live:
            self._live = live
            try:
                self.redraw()
                async for record in sink:
                    self.records.append(record)
                    self._set_state(DisplayState.ACCUMULATING)
                    self.redraw()

                if self.interactive:
                    await self.wait_for_quit()
                else:
                    self.redraw()
            finally:
                self._live = None

        self._set_state(DisplayState.TERMINATED)
        return self.records

    async def show_batch(self, records: Sequence[LocationRecord]) -> list[LocationRecord]:
        """Draw a finished batch, then wait for quit when interactive"""
        if not self.interactive:
            self.render_once(records)
            self._set_state(DisplayState.TERMINATED)
            return self.records

        with Live(console=self.console, screen=True,
                  auto_refresh=False, redirect_stderr=False) as live:
            self._live = live
            try:
                self.render_once(records)
                await self.wait_for_quit()
            finally:
                self._live = None

        self._set_state(DisplayState.TERMINATED)
        return self.records
