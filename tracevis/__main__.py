"""
TraceVis - Traceroute World Map

Entry point for running as a module:
    traceroute example.com | python -m tracevis
"""

from .cli import main

if __name__ == '__main__':
    main()
