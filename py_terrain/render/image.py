"""Raster export of color grids."""

import io
from pathlib import Path
from typing import Union

import numpy as np
import structlog
from PIL import Image

logger = structlog.get_logger()


def _check_colors(colors: np.ndarray) -> np.ndarray:
    colors = np.asarray(colors)
    if colors.ndim != 3 or colors.shape[2] != 3 or colors.shape[0] != colors.shape[1]:
        raise ValueError(f"Expected a square (n, n, 3) color grid, got shape {colors.shape}")
    if colors.dtype != np.uint8:
        if colors.min() < 0 or colors.max() > 255:
            raise ValueError("Color channels must be within [0, 255]")
        colors = colors.astype(np.uint8)
    return colors


def to_image(colors: np.ndarray) -> Image.Image:
    """
    Build an RGB image with one pixel per cell.

    The grid is indexed [x, y] while images are stored row by row, so the
    first two axes are swapped. The input array is left untouched.
    """
    colors = _check_colors(colors)
    pixels = np.ascontiguousarray(colors.transpose(1, 0, 2))
    return Image.fromarray(pixels).convert("RGB")


def save_world_image(colors: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Write ``colors`` to ``path``.

    The format follows the file suffix (PNG for ``.png``).

    Returns:
        The path written
    """
    path = Path(path)
    image = to_image(colors)
    image.save(path)
    logger.info("World image saved", path=str(path), width=image.width, height=image.height)
    return path


def encode_png(colors: np.ndarray) -> bytes:
    """PNG bytes for ``colors``."""
    buffer = io.BytesIO()
    to_image(colors).save(buffer, format="PNG")
    return buffer.getvalue()
