"""Text preview of a band grid, one glyph per cell."""

import sys
from typing import Optional, TextIO

import numpy as np

from ..core.terrain import TerrainBand

GLYPHS = {
    TerrainBand.OCEAN: "~",
    TerrainBand.LOWLAND: ".",
    TerrainBand.HIGHLAND: "^",
    TerrainBand.PEAK: " ",
}
UNKNOWN_GLYPH = " "


def render_preview(bands: np.ndarray) -> str:
    """
    Render a band grid indexed [x, y] as text.

    Each line is one y row, newline-terminated.
    """
    bands = np.asarray(bands)
    if bands.ndim != 2:
        raise ValueError(f"Expected a 2D band grid, got shape {bands.shape}")

    width, height = bands.shape
    lines = []
    for y in range(height):
        lines.append("".join(GLYPHS.get(int(bands[x, y]), UNKNOWN_GLYPH) for x in range(width)))
        lines.append("\n")
    return "".join(lines)


def print_world(bands: np.ndarray, file: Optional[TextIO] = None) -> None:
    """Write the preview of ``bands`` to ``file`` (stdout by default)."""
    stream = file if file is not None else sys.stdout
    stream.write(render_preview(bands))
    stream.flush()
