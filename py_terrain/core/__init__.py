"""
Core terrain generation functionality.
"""

from .errors import DegenerateHeightmapError, InvalidSizeError, TerrainGenerationError
from .heightmap_generator import (
    HeightmapConfig,
    HeightmapGenerator,
    generate_heightmap,
    is_valid_size,
)
from .terrain import (
    BAND_COLORS,
    BAND_NAMES,
    Color,
    Point,
    TerrainBand,
    TerrainClassifier,
    TerrainStatistics,
    classify,
    color_of,
    distance,
)

__all__ = ['HeightmapConfig', 'HeightmapGenerator', 'generate_heightmap', 'is_valid_size',
           'TerrainGenerationError', 'InvalidSizeError', 'DegenerateHeightmapError',
           'TerrainBand', 'TerrainClassifier', 'TerrainStatistics', 'Color', 'Point',
           'BAND_COLORS', 'BAND_NAMES', 'classify', 'color_of', 'distance']
