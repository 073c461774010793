"""
World map rendering with rich
"""

from typing import Iterable, Sequence

from rich.panel import Panel
from rich.text import Text

from ..models import LocationRecord
from .world import COASTLINES


LON_BOUNDS = (-180.0, 180.0)
LAT_BOUNDS = (-90.0, 90.0)

OUTLINE_GLYPH = '.'
MARK_GLYPH = 'x'
# cells holding several hops show the count, '+' past nine
OVERFLOW_GLYPH = '+'
STACKED_GLYPHS = '23456789' + OVERFLOW_GLYPH

GLYPH_STYLES = {
    OUTLINE_GLYPH: 'white',
    MARK_GLYPH: 'bold yellow',
    **{glyph: 'bold yellow' for glyph in STACKED_GLYPHS},
}


def mark_glyph(count: int) -> str:
    """Glyph for a cell holding ``count`` hops"""
    if count <= 1:
        return MARK_GLYPH
    return str(count) if count <= 9 else OVERFLOW_GLYPH


class MapRenderer:
    """
    Equirectangular world map with one mark per resolved hop.

    Every call draws from scratch, so rendering the same records twice
    gives the same frame.
    """

    def __init__(self, title: str = "traceroute-vis", border_style: str = "blue"):
        self.title = title
        self.border_style = border_style

    @staticmethod
    def project(lon: float, lat: float, width: int, height: int) -> tuple[int, int]:
        """Map a coordinate to a (column, row) cell"""
        lon = min(max(lon, LON_BOUNDS[0]), LON_BOUNDS[1])
        lat = min(max(lat, LAT_BOUNDS[0]), LAT_BOUNDS[1])
        x = (lon - LON_BOUNDS[0]) / (LON_BOUNDS[1] - LON_BOUNDS[0])
        y = (LAT_BOUNDS[1] - lat) / (LAT_BOUNDS[1] - LAT_BOUNDS[0])
        return round(x * (width - 1)), round(y * (height - 1))

    def _draw_outline(self, grid: list[list[str]], width: int, height: int):
        for line in COASTLINES:
            points = [self.project(lon, lat, width, height) for lon, lat in line]
            for (c0, r0), (c1, r1) in zip(points, points[1:]):
                steps = max(abs(c1 - c0), abs(r1 - r0), 1)
                for i in range(steps + 1):
                    col = round(c0 + (c1 - c0) * i / steps)
                    row = round(r0 + (r1 - r0) * i / steps)
                    grid[row][col] = OUTLINE_GLYPH

    def rasterize(self, records: Iterable[LocationRecord],
                  width: int, height: int) -> list[str]:
        """
        Draw the map into rows of characters.

        Args:
            records: Locations to mark
            width: Columns available for the map
            height: Rows available for the map

        Returns:
            ``height`` strings of ``width`` characters
        """
        if width < 1 or height < 1:
            return []

        grid = [[' '] * width for _ in range(height)]
        self._draw_outline(grid, width, height)

        counts: dict[tuple[int, int], int] = {}
        for record in records:
            cell = self.project(record.longitude, record.latitude, width, height)
            counts[cell] = counts.get(cell, 0) + 1

        for (col, row), count in counts.items():
            grid[row][col] = mark_glyph(count)

        return [''.join(row) for row in grid]

    def render(self, records: Sequence[LocationRecord],
               width: int, height: int) -> Panel:
        """
        Build the bordered map panel filling a width x height area.
        """
        rows = self.rasterize(records, max(width - 2, 0), max(height - 2, 0))

        content = Text(no_wrap=True, overflow='crop')
        for index, row in enumerate(rows):
            if index:
                content.append('\n')
            self._append_row(content, row)

        count = len(records)
        subtitle = Text(f"{count} hop{'s' if count != 1 else ''} located", style="dim")

        return Panel(
            content,
            title=Text(self.title, style="bold"),
            subtitle=subtitle,
            border_style=self.border_style,
            padding=(0, 0),
            width=width,
            height=height,
        )

    def _append_row(self, content: Text, row: str):
        """Append a row, styling runs of equal glyphs together"""
        start = 0
        for i in range(1, len(row) + 1):
            if i == len(row) or row[i] != row[start]:
                glyph = row[start]
                content.append(row[start:i], style=GLYPH_STYLES.get(glyph))
                start = i
