"""FastAPI main application."""

from typing import Dict, Optional, Union

import numpy as np
import structlog
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel, Field

from .. import __version__
from ..config import Settings, get_settings
from ..core.errors import DegenerateHeightmapError, InvalidSizeError
from ..core.heightmap_generator import generate_heightmap
from ..core.terrain import TerrainClassifier
from ..render.image import encode_png
from ..render.preview import render_preview
from ..utils.random import describe_seed

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Terrain Generator API",
    description="Diamond-square heightmaps classified into terrain bands",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class HeightmapRequest(BaseModel):
    """Request to generate a heightmap."""

    size: int = Field(65, ge=3, description="Grid side, must be 2**k + 1")
    roughness: float = Field(0.7, ge=0.0, le=1.0, description="Displacement damping factor")
    seed: Optional[Union[int, str]] = Field(
        None, union_mode="left_to_right", description="Random seed for reproducible generation"
    )
    sea_level: float = Field(127, allow_inf_nan=False, description="Height separating ocean from land")
    max_land_height: float = Field(255.0, gt=0, allow_inf_nan=False, description="Upper bound of normalized heights")
    include_preview: bool = Field(False, description="Include the text preview in the response")


class HeightmapResponse(BaseModel):
    """Summary of a generated heightmap."""

    size: int
    roughness: float
    seed: str
    sea_level: float
    min_height: float
    max_height: float
    mean_height: float
    land_percent: float
    band_counts: Dict[str, int]
    preview: Optional[str] = None


def _generate(request: HeightmapRequest, settings: Settings) -> np.ndarray:
    """Run generation, translating failures into HTTP errors."""
    if request.size > settings.max_api_grid_size:
        raise HTTPException(
            status_code=422,
            detail=f"Grid size {request.size} exceeds limit {settings.max_api_grid_size}",
        )
    try:
        return generate_heightmap(
            request.size,
            request.roughness,
            request.seed,
            max_land_height=request.max_land_height,
        )
    except InvalidSizeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DegenerateHeightmapError as e:
        logger.warning("Degenerate heightmap", seed=describe_seed(request.seed))
        raise HTTPException(status_code=409, detail=str(e))


def _query_request(
    size: int = Query(65, ge=3),
    roughness: float = Query(0.7, ge=0.0, le=1.0),
    seed: Optional[str] = Query(None),
    sea_level: float = Query(127, allow_inf_nan=False),
) -> HeightmapRequest:
    return HeightmapRequest(size=size, roughness=roughness, seed=seed, sea_level=sea_level)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Terrain Generator API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/heightmaps", response_model=HeightmapResponse)
def create_heightmap(request: HeightmapRequest, settings: Settings = Depends(get_settings)):
    """Generate a heightmap and return its statistics."""
    logger.info("Heightmap requested", request=request.model_dump())

    heights = _generate(request, settings)
    classifier = TerrainClassifier(request.sea_level)
    stats = classifier.statistics(heights)

    preview = None
    if request.include_preview:
        preview = render_preview(classifier.classify_grid(heights))

    return HeightmapResponse(
        size=stats.size,
        roughness=request.roughness,
        seed=describe_seed(request.seed),
        sea_level=request.sea_level,
        min_height=stats.min_height,
        max_height=stats.max_height,
        mean_height=stats.mean_height,
        land_percent=stats.land_percent,
        band_counts=stats.band_counts,
        preview=preview,
    )


@app.get("/heightmaps/image.png")
def heightmap_image(
    request: HeightmapRequest = Depends(_query_request),
    settings: Settings = Depends(get_settings),
):
    """Render a heightmap as a PNG, one pixel per cell."""
    heights = _generate(request, settings)
    colors = TerrainClassifier(request.sea_level).render(heights)
    return Response(content=encode_png(colors), media_type="image/png")


@app.get("/heightmaps/preview", response_class=PlainTextResponse)
def heightmap_preview(
    request: HeightmapRequest = Depends(_query_request),
    settings: Settings = Depends(get_settings),
):
    """Render a heightmap as glyph text."""
    heights = _generate(request, settings)
    bands = TerrainClassifier(request.sea_level).classify_grid(heights)
    return PlainTextResponse(render_preview(bands))


def run() -> None:
    """Serve the API with uvicorn using configured host and port."""
    import uvicorn

    from ..utils.log_config import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
