"""
Heightmap generation using the diamond-square algorithm.

The grid is subdivided level by level: each level first fills the centres of
the current squares (square step), then the midpoints of their edges (diamond
step), adding random displacement that shrinks with the step size. NumPy
computes the averages for a whole step at once; random draws are still taken
one cell at a time in a fixed order so that a seeded source always produces
the same grid.

Draw order for a grid of side ``size``:

1. Four corner draws: (0, 0), (0, size-1), (size-1, 0), (size-1, size-1).
2. For each level, ``step = size-1, (size-1)/2, ..., 2``:
   square-step centres with x outer and y inner, then diamond-step points
   for ``x in range(0, size, half)`` and
   ``y in range((x + half) % step, size, step)``.

Every cell is assigned exactly once, so a run consumes ``size**2`` draws.

Diamond-step neighbours that fall off the grid wrap with period ``size - 1``,
not modulo ``size``: row/column ``size - 1`` and row/column 0 are treated as
the same seam. Output is therefore not bit-identical to implementations that
address neighbours modulo ``size``.
"""

import math
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
import structlog

from ..utils.random import RandomSource, Seed, create_random_source
from .errors import DegenerateHeightmapError, InvalidSizeError

logger = structlog.get_logger()

DEFAULT_SIZE = 257
DEFAULT_ROUGHNESS = 0.7
MAX_LAND_HEIGHT = 255.0


def is_valid_size(size) -> bool:
    """Check that ``size`` is ``2**k + 1`` for some ``k >= 1``."""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        return False
    n = int(size) - 1
    return n >= 2 and (n & (n - 1)) == 0


@dataclass
class HeightmapConfig:
    """Configuration for heightmap generation."""

    size: int = DEFAULT_SIZE
    roughness: float = DEFAULT_ROUGHNESS
    max_land_height: float = MAX_LAND_HEIGHT

    def validate(self) -> None:
        """Raise if the configuration cannot produce a heightmap."""
        if not is_valid_size(self.size):
            raise InvalidSizeError(self.size)
        if not 0.0 <= self.roughness <= 1.0:
            raise ValueError(f"Roughness must be within [0, 1], got {self.roughness}")
        if not (math.isfinite(self.max_land_height) and self.max_land_height > 0):
            raise ValueError(
                f"Max land height must be positive and finite, got {self.max_land_height}"
            )

    @property
    def levels(self) -> int:
        """Number of subdivision levels, log2(size - 1)."""
        return (self.size - 1).bit_length() - 1


class HeightmapGenerator:
    """
    Generates square heightmaps with diamond-square midpoint displacement.

    The generator holds configuration only. Each call to :meth:`generate`
    allocates a fresh grid, so one generator can be reused across runs.
    """

    def __init__(self, config: HeightmapConfig):
        """
        Initialize the heightmap generator.

        Args:
            config: Heightmap configuration

        Raises:
            InvalidSizeError: If ``config.size`` is not 2**k + 1
            ValueError: If roughness or max height are out of range
        """
        config.validate()
        self.config = config
        self.size = config.size
        self.draw_count = 0

    def generate(self, source: RandomSource) -> np.ndarray:
        """
        Run diamond-square and normalize the result.

        Args:
            source: Random source; consumed in the documented draw order

        Returns:
            Array of shape (size, size) indexed [x, y], values in
            [0, max_land_height] with both bounds attained

        Raises:
            DegenerateHeightmapError: If every cell has the same height
        """
        logger.info(
            "Generating heightmap",
            size=self.size,
            roughness=self.config.roughness,
            levels=self.config.levels,
        )
        terrain = self.displace(source)
        heights = self.normalize(terrain)
        logger.info("Heightmap generated", size=self.size, draws=self.draw_count)
        return heights

    def displace(self, source: RandomSource) -> np.ndarray:
        """Seed the corners and subdivide; returns the raw, unnormalized grid."""
        self.draw_count = 0
        terrain = np.zeros((self.size, self.size), dtype=np.float64)

        self._seed_corners(terrain, source)

        step = self.size - 1
        while step > 1:
            self._square_step(terrain, step, source)
            self._diamond_step(terrain, step, source)
            logger.debug("Subdivision level complete", step=step, draws=self.draw_count)
            step //= 2

        return terrain

    def normalize(self, terrain: np.ndarray) -> np.ndarray:
        """Linearly rescale ``terrain`` into [0, max_land_height]."""
        low = float(terrain.min())
        high = float(terrain.max())
        if high == low:
            logger.warning("Heightmap is flat, cannot normalize", value=low)
            raise DegenerateHeightmapError(low)

        heights = (terrain - low) / (high - low) * self.config.max_land_height
        logger.debug("Heightmap normalized", raw_min=low, raw_max=high)
        return heights

    def _draw(self, source: RandomSource, count: int) -> np.ndarray:
        """Take ``count`` uniform draws, in order."""
        values = np.array([source.random() for _ in range(count)], dtype=np.float64)
        self.draw_count += count
        return values

    def _displacement(self, draws: np.ndarray, step: int) -> np.ndarray:
        return (draws - 0.5) * step * self.config.roughness

    def _seed_corners(self, terrain: np.ndarray, source: RandomSource) -> None:
        last = self.size - 1
        corners = [(0, 0), (0, last), (last, 0), (last, last)]
        draws = self._draw(source, len(corners))
        for (x, y), value in zip(corners, draws):
            terrain[x, y] = value * self.config.max_land_height

    def _square_step(self, terrain: np.ndarray, step: int, source: RandomSource) -> None:
        half = step // 2
        last = self.size - 1

        centres = np.arange(half, self.size, step)
        xs, ys = np.meshgrid(centres, centres, indexing="ij")
        xs = xs.ravel()
        ys = ys.ravel()

        # Corner lookups clamp to the grid edge; for 2**k + 1 sizes every
        # corner is already in range, so the clamp never changes an index
        x_lo = np.clip(xs - half, 0, last)
        x_hi = np.clip(xs + half, 0, last)
        y_lo = np.clip(ys - half, 0, last)
        y_hi = np.clip(ys + half, 0, last)

        avg = (
            terrain[x_lo, y_lo]
            + terrain[x_lo, y_hi]
            + terrain[x_hi, y_lo]
            + terrain[x_hi, y_hi]
        ) / 4.0
        terrain[xs, ys] = avg + self._displacement(self._draw(source, len(xs)), step)

    def _diamond_step(self, terrain: np.ndarray, step: int, source: RandomSource) -> None:
        half = step // 2
        xs, ys = self._diamond_points(step)

        avg = (
            terrain[self._wrap(xs - half), ys]
            + terrain[self._wrap(xs + half), ys]
            + terrain[xs, self._wrap(ys + half)]
            + terrain[xs, self._wrap(ys - half)]
        ) / 4.0
        terrain[xs, ys] = avg + self._displacement(self._draw(source, len(xs)), step)

    def _diamond_points(self, step: int) -> Tuple[np.ndarray, np.ndarray]:
        """Edge midpoints for one level, in draw order."""
        half = step // 2
        xs, ys = [], []
        for x in range(0, self.size, half):
            column = np.arange((x + half) % step, self.size, step)
            xs.append(np.full(len(column), x))
            ys.append(column)
        return np.concatenate(xs), np.concatenate(ys)

    def _wrap(self, index: np.ndarray) -> np.ndarray:
        """
        Map out-of-range neighbour indices to the opposite edge.

        The period is ``size - 1``: the first and last rows are the same
        seam of the torus, so a wrapped lookup always lands on a point that
        is already computed at this level.
        """
        period = self.size - 1
        index = np.where(index < 0, index + period, index)
        return np.where(index > period, index - period, index)


def generate_heightmap(
    size: int,
    roughness: float,
    source: Union[RandomSource, Seed],
    max_land_height: float = MAX_LAND_HEIGHT,
) -> np.ndarray:
    """
    Generate a normalized diamond-square heightmap.

    Args:
        size: Grid side, 2**k + 1
        roughness: Displacement damping factor in [0, 1]
        source: A random source, or a seed (int/str/None) to build one from
        max_land_height: Upper bound of the normalized heights

    Returns:
        Array of shape (size, size) indexed [x, y]
    """
    config = HeightmapConfig(size=size, roughness=roughness, max_land_height=max_land_height)
    generator = HeightmapGenerator(config)
    if not isinstance(source, RandomSource):
        source = create_random_source(source)
    return generator.generate(source)
