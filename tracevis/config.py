"""
Runtime settings for TraceVis

Settings come from command-line options only. There are no config
files, environment variables, or persisted state.
"""

from dataclasses import dataclass


DEFAULT_ENDPOINT = "https://www.iplocate.io/api/lookup"
DEFAULT_TIMEOUT = 5.0  # seconds per lookup
DEFAULT_CONCURRENCY = 16  # in-flight lookups
DEFAULT_BUFFER_SIZE = 64  # results waiting for the display
DEFAULT_PUSH_TIMEOUT = 5.0  # seconds a producer may wait on a full buffer
DEFAULT_TITLE = "traceroute-vis"

MODES = ('stream', 'batch')


@dataclass(frozen=True)
class Settings:
    """
    TraceVis settings.

    mode:
    - stream: lookups feed a live-updating map
    - batch: wait for every lookup, then draw once
    """
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    buffer_size: int = DEFAULT_BUFFER_SIZE
    push_timeout: float = DEFAULT_PUSH_TIMEOUT
    mode: str = 'stream'
    interactive: bool = True
    title: str = DEFAULT_TITLE

    def validate(self) -> 'Settings':
        """Check values, returning self so calls can be chained"""
        if not self.endpoint:
            raise ValueError("Endpoint must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        if self.concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {self.concurrency}")
        if self.buffer_size < 1:
            raise ValueError(f"Buffer size must be at least 1, got {self.buffer_size}")
        if self.push_timeout < 0:
            raise ValueError(f"Push timeout must not be negative, got {self.push_timeout}")
        if self.mode not in MODES:
            raise ValueError(
                f"Unknown mode '{self.mode}'. Supported: {', '.join(MODES)}"
            )
        return self

    def lookup_url(self, address: str) -> str:
        """URL for looking up a single address"""
        return f"{self.endpoint.rstrip('/')}/{address}"
