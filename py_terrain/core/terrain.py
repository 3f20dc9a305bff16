"""
Terrain band classification and color rendering.

Heights are split into four bands relative to sea level. The band, not its
color, is what downstream code should branch on; colors and preview glyphs
are both looked up from the band.
"""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, NamedTuple

import numpy as np
import structlog

logger = structlog.get_logger()

SEA_LEVEL = 127
LOWLAND_RISE = 20
HIGHLAND_RISE = 50


class TerrainBand(IntEnum):
    """Height bands, in ascending threshold order."""

    OCEAN = 0
    LOWLAND = 1
    HIGHLAND = 2
    PEAK = 3

    @property
    def is_land(self) -> bool:
        return self is not TerrainBand.OCEAN


class Color(NamedTuple):
    r: int
    g: int
    b: int


class Point(NamedTuple):
    x: int
    y: int


BAND_NAMES = {
    TerrainBand.OCEAN: "Ocean",
    TerrainBand.LOWLAND: "Lowland",
    TerrainBand.HIGHLAND: "Highland",
    TerrainBand.PEAK: "Peak",
}

BAND_COLORS = {
    TerrainBand.OCEAN: Color(0, 0, 255),
    TerrainBand.LOWLAND: Color(0, 255, 0),
    TerrainBand.HIGHLAND: Color(139, 69, 19),
    TerrainBand.PEAK: Color(255, 255, 255),
}

# Indexed by band value
PALETTE = np.array([BAND_COLORS[band] for band in TerrainBand], dtype=np.uint8)


def color_of(band: TerrainBand) -> Color:
    """Color used to draw ``band``."""
    return BAND_COLORS[TerrainBand(band)]


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two grid points."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


@dataclass
class TerrainStatistics:
    """Summary of a classified heightmap."""

    size: int
    min_height: float
    max_height: float
    mean_height: float
    band_counts: Dict[str, int] = field(default_factory=dict)
    land_percent: float = 0.0


class TerrainClassifier:
    """Maps heights to terrain bands and colors."""

    def __init__(self, sea_level: float = SEA_LEVEL):
        if math.isnan(sea_level):
            raise ValueError("Sea level must be a number")
        self.sea_level = sea_level
        self.thresholds = (
            sea_level,
            sea_level + LOWLAND_RISE,
            sea_level + HIGHLAND_RISE,
        )

    def classify(self, height: float) -> TerrainBand:
        """
        Classify a single height.

        Total over finite and infinite floats: anything at or below sea level
        is ocean, anything above the highland threshold is a peak.
        """
        if math.isnan(height):
            raise ValueError("Cannot classify NaN height")
        ocean, lowland, highland = self.thresholds
        if height <= ocean:
            return TerrainBand.OCEAN
        if height <= lowland:
            return TerrainBand.LOWLAND
        if height <= highland:
            return TerrainBand.HIGHLAND
        return TerrainBand.PEAK

    def classify_grid(self, heights: np.ndarray) -> np.ndarray:
        """Band for every cell; same shape as ``heights``."""
        heights = np.asarray(heights, dtype=np.float64)
        if np.isnan(heights).any():
            raise ValueError("Cannot classify NaN height")
        ocean, lowland, highland = self.thresholds
        return np.select(
            [heights <= ocean, heights <= lowland, heights <= highland],
            [TerrainBand.OCEAN, TerrainBand.LOWLAND, TerrainBand.HIGHLAND],
            default=TerrainBand.PEAK,
        ).astype(np.uint8)

    def colorize(self, bands: np.ndarray) -> np.ndarray:
        """Color grid of shape (*bands.shape, 3) for a band grid."""
        return PALETTE[np.asarray(bands, dtype=np.intp)]

    def render(self, heights: np.ndarray) -> np.ndarray:
        """Classify then colorize a height grid."""
        colors = self.colorize(self.classify_grid(heights))
        logger.debug("Heightmap rendered", shape=colors.shape)
        return colors

    def statistics(self, heights: np.ndarray) -> TerrainStatistics:
        """Height range and band distribution of a heightmap."""
        heights = np.asarray(heights, dtype=np.float64)
        bands = self.classify_grid(heights)
        counts = np.bincount(bands.ravel(), minlength=len(TerrainBand))
        total = int(bands.size)
        land = total - int(counts[TerrainBand.OCEAN])

        return TerrainStatistics(
            size=heights.shape[0],
            min_height=float(heights.min()),
            max_height=float(heights.max()),
            mean_height=float(heights.mean()),
            band_counts={BAND_NAMES[band]: int(counts[band]) for band in TerrainBand},
            land_percent=land / total * 100 if total else 0.0,
        )


def classify(height: float, sea_level: float = SEA_LEVEL) -> TerrainBand:
    """Classify one height against ``sea_level``."""
    return TerrainClassifier(sea_level).classify(height)
