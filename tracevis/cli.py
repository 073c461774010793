import asyncio
import logging
import sys
from typing import Optional, TextIO

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import (
    DEFAULT_BUFFER_SIZE, DEFAULT_CONCURRENCY, DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT, DEFAULT_TITLE, MODES, Settings,
)
from .enrichment import GeoResolver
from .models import LocationRecord
from .output import DisplayLoop, MapRenderer
from .pipeline import ResolutionPipeline
from .sink import ResultSink


console = Console()
logger = logging.getLogger('tracevis')


def setup_logging(verbose: bool = False, log_file: Optional[str] = None,
                  target: Optional[Console] = None):
    """
    Route tracevis logs to the display console, plus an optional file.

    The console handler shares the display's Console so log lines do not
    tear the live map.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(logging.DEBUG if (verbose or log_file) else logging.WARNING)
    logger.propagate = False

    handler = RichHandler(console=target or console, show_path=False, markup=False)
    handler.setLevel(level)
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        ))
        logger.addHandler(file_handler)


async def run(lines: TextIO, settings: Settings,
              display: Optional[DisplayLoop] = None,
              resolver: Optional[GeoResolver] = None) -> list[LocationRecord]:
    """
    Resolve hops read from ``lines`` and show them on the map.

    Returns:
        Every record that reached the display
    """
    display = display or DisplayLoop(
        console=console,
        renderer=MapRenderer(title=settings.title),
        interactive=settings.interactive,
    )

    async with (resolver or GeoResolver(settings)) as geo:
        if settings.mode == 'batch':
            sink = ResultSink(capacity=0)
            pipeline = ResolutionPipeline(geo, sink, concurrency=settings.concurrency)
            records = await pipeline.run_batch(lines)
            return await display.show_batch(records)

        sink = ResultSink(capacity=settings.buffer_size,
                          push_timeout=settings.push_timeout)
        pipeline = ResolutionPipeline(geo, sink, concurrency=settings.concurrency)
        pipeline_task = asyncio.create_task(pipeline.run(lines))
        display_task = asyncio.create_task(display.run(sink))
        try:
            await asyncio.gather(pipeline_task, display_task)
        finally:
            # no-op when both finished; stops the survivor if one failed
            pipeline_task.cancel()
            display_task.cancel()
        return display_task.result()


@click.command()
@click.argument('input_file', metavar='INPUT', default='-',
                type=click.File('r', encoding='utf-8', errors='replace'))
@click.option('--mode', default='stream',
              type=click.Choice(MODES, case_sensitive=False),
              help='stream: live map; batch: draw once all lookups finish (default: stream)')
@click.option('--wait/--no-wait', default=True,
              help='Keep the map open until q is pressed (default: wait)')
@click.option('--endpoint', default=DEFAULT_ENDPOINT,
              help='Geolocation lookup URL; the address is appended to the path')
@click.option('-w', '--timeout', default=DEFAULT_TIMEOUT, type=float,
              help=f'Timeout per lookup in seconds (default: {DEFAULT_TIMEOUT:g})')
@click.option('-c', '--concurrency', default=DEFAULT_CONCURRENCY, type=int,
              help=f'Maximum lookups in flight (default: {DEFAULT_CONCURRENCY})')
@click.option('--buffer', 'buffer_size', default=DEFAULT_BUFFER_SIZE, type=int,
              help=f'Results buffered for the display (default: {DEFAULT_BUFFER_SIZE})')
@click.option('--title', default=DEFAULT_TITLE, help='Map panel title')
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging')
@click.option('--log-file', type=click.Path(dir_okay=False),
              help='Also write debug logging to this file')
@click.version_option(version=__version__)
def main(input_file: TextIO, mode: str, wait: bool, endpoint: str, timeout: float,
         concurrency: int, buffer_size: int, title: str, verbose: bool,
         log_file: Optional[str]):
    """
    TraceVis - plot traceroute hops on a world map.

    Reads traceroute output from INPUT (default: stdin), looks up the
    location of every public hop and marks it on the map.

    Examples:

        traceroute example.com | tracevis

        traceroute 8.8.8.8 | tracevis --mode batch --no-wait

        tracevis saved-trace.txt
    """
    try:
        setup_logging(verbose=verbose, log_file=log_file)
    except OSError as e:
        console.print(f"[bold red]Error:[/] Cannot open log file: {e}")
        sys.exit(1)

    try:
        settings = Settings(
            endpoint=endpoint,
            timeout=timeout,
            concurrency=concurrency,
            buffer_size=buffer_size,
            mode=mode.lower(),
            interactive=wait,
            title=title,
        ).validate()
    except ValueError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    try:
        asyncio.run(run(input_file, settings))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/]")
        sys.exit(130)
    except OSError as e:
        console.print(f"[bold red]Error:[/] Terminal I/O failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
