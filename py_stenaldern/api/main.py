"""FastAPI main application."""

import logging
import math
from typing import Any, List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..ai import OpenRouterClient
from ..config import settings
from ..core.geology import GeoAnalysis, analyze_all_periods, analyze_location
from ..core.location import LocationAnalysis, LocationType, analyze_location_type
from ..core.periods import (
    ERA_NAMES,
    TimePeriod,
    get_periods_by_era,
    requires_geology,
    resolve_period,
    stone_period_for,
    year_to_bp,
)
from ..core.prompts import build_costume_change_prompt, build_photo_transform_prompt, generate_image_prompt
from ..core.uplift import Region, get_region

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.log_format == "plain" else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Stenåldern API",
    description="See how a Swedish location looked in a chosen historical period",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

COORDINATES_REQUIRED = "Latitude and longitude are required"


# Request/Response models
class Coordinates(BaseModel):
    lat: float
    lng: float


class GeologyBatchRequest(BaseModel):
    """Request to analyse every stone-age period for a coordinate."""

    latitude: Optional[Any] = Field(None, description="WGS84 latitude, validated by the endpoint")
    longitude: Optional[Any] = Field(None, description="WGS84 longitude, validated by the endpoint")


class GenerateRequest(BaseModel):
    """Request to generate a historical scene."""

    latitude: Optional[Any] = Field(None, description="WGS84 latitude, validated by the endpoint")
    longitude: Optional[Any] = Field(None, description="WGS84 longitude, validated by the endpoint")
    period: Optional[str] = Field(None, description="Time period id, defaults to the earliest period")
    image_base64: Optional[str] = Field(None, description="Optional JPEG photo of the current view")


class GeologyResponse(GeoAnalysis):
    """Geology of one coordinate in one stone-age period."""

    success: bool = True
    coordinates: Coordinates


class PeriodGeology(GeoAnalysis):
    period_id: str


class GeologyBatchResponse(BaseModel):
    """Geology of one coordinate across all stone-age periods."""

    success: bool = True
    coordinates: Coordinates
    region: Region
    periods: List[PeriodGeology]


class PeriodGroup(BaseModel):
    era: str
    name: str
    periods: List[TimePeriod]


class SeaPhaseSummary(BaseModel):
    name: str
    salinity: str
    description: str


class GeologicalData(BaseModel):
    """Sea-level reconstruction attached to prehistoric and ancient scenes."""

    current_elevation: float
    region: Region
    was_underwater: bool
    historical_elevation: float
    sea_level: float
    total_uplift: float
    years_bp: int
    sea_phase: SeaPhaseSummary


class HistoricalContext(BaseModel):
    landscape: str
    vegetation: str
    fauna: str
    buildings: str
    people: str
    technology: str
    location_analysis: Optional[str] = None


class GenerateResponse(BaseModel):
    """Generated scene with its historical context."""

    success: bool = True
    period: str
    period_id: str
    year_range: str
    description: str

    location_type: LocationType
    location_description: str
    nearest_city: Optional[str] = None
    distance_to_city: Optional[float] = None
    city_existed_in_period: bool

    geological_data: Optional[GeologicalData] = None
    historical_context: HistoricalContext

    image_prompt: str
    view_description: str = ""
    generated_image_url: Optional[str] = None
    generated_image_base64: Optional[str] = None
    image_generation_error: Optional[str] = None


def _require_coordinates(lat, lng) -> Coordinates:
    """Parse coordinates or fail with 400."""
    if lat is None or lng is None or isinstance(lat, bool) or isinstance(lng, bool):
        raise HTTPException(status_code=400, detail=COORDINATES_REQUIRED)
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=COORDINATES_REQUIRED)
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise HTTPException(status_code=400, detail=COORDINATES_REQUIRED)
    return Coordinates(lat=lat, lng=lng)


def _landscape_for(period: TimePeriod, location_analysis: LocationAnalysis) -> str:
    if location_analysis.type == LocationType.URBAN and location_analysis.city_existed_in_period:
        return period.landscape.urban
    if location_analysis.type == LocationType.COASTAL:
        return period.landscape.coastal
    return period.landscape.rural


def _geological_data(geo_analysis: GeoAnalysis, period: TimePeriod) -> GeologicalData:
    sea_status = geo_analysis.sea_status
    return GeologicalData(
        current_elevation=geo_analysis.elevation,
        region=geo_analysis.region,
        was_underwater=sea_status.was_underwater,
        historical_elevation=sea_status.historical_elevation,
        sea_level=sea_status.sea_level,
        total_uplift=sea_status.uplift_meters,
        years_bp=year_to_bp(period.year_start),
        sea_phase=SeaPhaseSummary(
            name=sea_status.sea_phase.name,
            salinity=sea_status.sea_phase.salinity.value,
            description=sea_status.sea_phase.description,
        ),
    )


@app.on_event("startup")
async def startup_event():
    logger.info("Starting Stenåldern API", version=__version__)
    if not settings.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY not set, image generation is disabled")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Stenåldern API")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Stenåldern API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "image_generation": bool(settings.openrouter_api_key)}


@app.get("/periods", response_model=List[PeriodGroup])
async def list_periods():
    """Time periods grouped by era."""
    return [
        PeriodGroup(era=era.value, name=ERA_NAMES[era], periods=periods)
        for era, periods in get_periods_by_era().items()
    ]


@app.get("/geology", response_model=GeologyResponse)
async def get_geology(lat: Optional[str] = None, lng: Optional[str] = None, period: str = "atlantic_early"):
    """Geology of a coordinate in one stone-age period."""
    coordinates = _require_coordinates(lat, lng)
    analysis = await analyze_location(coordinates.lat, coordinates.lng, period)
    return GeologyResponse(coordinates=coordinates, **analysis.model_dump())


@app.post("/geology", response_model=GeologyBatchResponse)
async def get_geology_all_periods(request: GeologyBatchRequest):
    """Geology of a coordinate in every stone-age period."""
    coordinates = _require_coordinates(request.latitude, request.longitude)
    analyses = await analyze_all_periods(coordinates.lat, coordinates.lng)

    return GeologyBatchResponse(
        coordinates=coordinates,
        region=get_region(coordinates.lat, coordinates.lng),
        periods=[PeriodGeology(period_id=a.period.id, **a.model_dump()) for a in analyses],
    )


@app.post("/generate", response_model=GenerateResponse)
async def generate_scene(request: GenerateRequest):
    """
    Generate a historical scene for a coordinate.

    Classifies the location, reconstructs the sea level for prehistoric and
    ancient periods, describes the uploaded photo and asks the image model for
    a historically accurate picture. Vision and image failures are reported in
    the response rather than failing the request.
    """
    coordinates = _require_coordinates(request.latitude, request.longitude)

    api_key = settings.openrouter_api_key
    if not api_key:
        raise HTTPException(status_code=500, detail="OpenRouter API key is not configured")

    period = resolve_period(request.period)
    location_analysis = analyze_location_type(coordinates.lat, coordinates.lng, period.year_start)

    geo_analysis: Optional[GeoAnalysis] = None
    if requires_geology(period):
        geo_analysis = await analyze_location(
            coordinates.lat, coordinates.lng, stone_period_for(period.id).id
        )

    logger.info(
        "Generating scene",
        period=period.id,
        location_type=location_analysis.type.value,
        has_image=bool(request.image_base64),
    )

    async with OpenRouterClient(api_key) as client:
        view_description = ""
        has_person = False
        person_description = ""
        if request.image_base64:
            view = await client.describe_view(request.image_base64)
            view_description = view.view_description
            has_person = view.has_person
            person_description = view.person_description

        image_prompt = generate_image_prompt(
            period,
            location_analysis,
            geo_analysis,
            view_description,
            has_person,
            person_description,
        )

        edit_instruction = None
        if request.image_base64:
            if has_person:
                edit_instruction = build_costume_change_prompt(period)
            else:
                edit_instruction = build_photo_transform_prompt(period, image_prompt)

        image = await client.generate_image(image_prompt, request.image_base64, edit_instruction)

    features = period.features
    return GenerateResponse(
        period=period.name,
        period_id=period.id,
        year_range=period.year_label,
        description=period.description,
        location_type=location_analysis.type,
        location_description=location_analysis.historical_description,
        nearest_city=location_analysis.nearest_city.name if location_analysis.nearest_city else None,
        distance_to_city=location_analysis.distance_to_city,
        city_existed_in_period=location_analysis.city_existed_in_period,
        geological_data=_geological_data(geo_analysis, period) if geo_analysis else None,
        historical_context=HistoricalContext(
            landscape=_landscape_for(period, location_analysis),
            vegetation=features.vegetation,
            fauna=features.animals,
            buildings=features.buildings,
            people=features.people,
            technology=features.technology,
            location_analysis=geo_analysis.sea_status.description if geo_analysis else None,
        ),
        image_prompt=image_prompt,
        view_description=view_description,
        generated_image_url=image.url,
        generated_image_base64=image.base64,
        image_generation_error=image.error,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "py_stenaldern.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
