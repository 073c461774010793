"""
TraceVis - Traceroute World Map

Resolves traceroute hops to geographic locations and plots them
on a world map in the terminal as results arrive.
"""

__version__ = "1.0.0"
__author__ = "TraceVis"
