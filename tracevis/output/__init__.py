"""
Output modules for TraceVis
"""

from .map_render import MapRenderer
from .display import DisplayLoop, DisplayState

__all__ = ['MapRenderer', 'DisplayLoop', 'DisplayState']
