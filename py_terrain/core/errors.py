"""Exceptions raised by terrain generation."""


class TerrainGenerationError(Exception):
    """Base class for heightmap generation failures."""


class InvalidSizeError(TerrainGenerationError, ValueError):
    """Grid size is not of the form 2**k + 1 with k >= 1."""

    def __init__(self, size):
        self.size = size
        super().__init__(
            f"Grid size must be 2**k + 1 with k >= 1 (3, 5, 9, 17, ...), got {size!r}"
        )


class DegenerateHeightmapError(TerrainGenerationError, RuntimeError):
    """Every cell ended up at the same height, so normalization is undefined."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(
            f"Heightmap is flat (all cells = {value}); cannot normalize. "
            "Retry with a different seed or a non-zero roughness."
        )
