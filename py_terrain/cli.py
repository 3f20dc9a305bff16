"""
Command line entry point.

Generates a world, writes it as an image and prints the text preview.
Defaults come from environment settings (``PY_TERRAIN_*``).
"""

import argparse
import sys
from typing import List, Optional

import structlog

from .config import get_settings
from .core.errors import TerrainGenerationError
from .core.heightmap_generator import generate_heightmap
from .core.terrain import TerrainClassifier
from .render.image import save_world_image
from .render.preview import print_world
from .utils.log_config import configure_logging
from .utils.random import describe_seed

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="py-terrain",
        description="Generate a diamond-square terrain map",
    )
    parser.add_argument("--size", type=int, default=settings.grid_size, help="Grid side, 2**k + 1")
    parser.add_argument("--roughness", type=float, default=settings.roughness, help="Displacement damping factor in [0, 1]")
    parser.add_argument("--sea-level", type=float, default=settings.sea_level, help="Height separating ocean from land")
    parser.add_argument("--max-height", type=float, default=settings.max_land_height, help="Upper bound of normalized heights")
    parser.add_argument("--seed", default=settings.seed, help="Random seed (integer or string)")
    parser.add_argument("--output", default=settings.output_path, help="Image file to write")
    parser.add_argument("--no-preview", action="store_true", help="Skip printing the text preview")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def _parse_seed(seed):
    if isinstance(seed, str):
        try:
            return int(seed)
        except ValueError:
            return seed
    return seed


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, get_settings().log_format)

    seed = _parse_seed(args.seed)
    logger.info("Generating world", size=args.size, roughness=args.roughness, seed=describe_seed(seed))

    try:
        classifier = TerrainClassifier(args.sea_level)
        heights = generate_heightmap(args.size, args.roughness, seed, max_land_height=args.max_height)
    except (TerrainGenerationError, ValueError) as e:
        logger.error("World generation failed", error=str(e))
        return 2

    bands = classifier.classify_grid(heights)
    save_world_image(classifier.colorize(bands), args.output)

    if not args.no_preview:
        print_world(bands)

    stats = classifier.statistics(heights)
    logger.info("World generated", output=args.output, land_percent=round(stats.land_percent, 1))
    return 0


if __name__ == "__main__":
    sys.exit(main())
