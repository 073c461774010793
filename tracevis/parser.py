"""
Traceroute text parsing
"""

import logging
from typing import Iterable, Iterator, Optional


logger = logging.getLogger(__name__)

TIMEOUT_MARKER = '*'


def parse_hop_line(line: str) -> Optional[str]:
    """
    Extract the hop address from one line of traceroute output.

    The expected layout is ``<hop> <hostname> (<address>) ...``; only the
    third field is used, with its delimiters stripped.

    Returns:
        Bare address, or None for timeouts and malformed lines
    """
    fields = line.split()
    if len(fields) < 3:
        logger.debug("Skipping short line: %r", line)
        return None

    candidate = fields[2]
    if candidate == TIMEOUT_MARKER:
        return None

    if len(candidate) < 2:
        logger.debug("Skipping malformed address field: %r", candidate)
        return None

    return candidate[1:-1]


def iter_hop_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield hop lines, always dropping the header line"""
    iterator = iter(lines)
    next(iterator, None)
    for line in iterator:
        yield line.rstrip('\r\n')
