"""
Geological reconstruction of a location for a stone-age period.

This module implements:
- Landscape, vegetation and fauna selection by age (years BP) and sea status
- Boreal vocabulary for northern uplift regions
- Single-period analysis (elevation lookup + sea status)
- Batch analysis of every stone-age period for one coordinate
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Tuple

import httpx
import structlog
from pydantic import BaseModel

from ..config import settings
from .elevation import fetch_elevation
from .periods import STONE_AGE_PERIODS, StonePeriod, get_stone_period
from .sea_phases import Salinity
from .sea_status import SeaStatusResult, calculate_historical_sea_status
from .uplift import Region, get_region

logger = structlog.get_logger()


@dataclass(frozen=True)
class LandCover:
    """Landscape vocabulary for one age bracket."""

    landscape: str
    vegetation: str
    fauna: str


# (years BP lower bound, exclusive), oldest first
LAND_COVER_BY_AGE: Tuple[Tuple[int, LandCover], ...] = (
    (10000, LandCover(
        landscape="Tundra och glaciärnära landskap, permafrost",
        vegetation="Lavar, mossor, dvärgbjörk, vide",
        fauna="Ren, fjällräv, lämmel, mammut (utdöende)",
    )),
    (8000, LandCover(
        landscape="Öppen björkskog, många sjöar från smältvatten",
        vegetation="Björk, tall börjar etableras, vide",
        fauna="Älg, ren, bäver, varg, björn",
    )),
    (5000, LandCover(
        landscape="Tät lövskog, klimatoptimum (2-3°C varmare)",
        vegetation="Ek, alm, lind, ask, hassel",
        fauna="Kronhjort, vildsvin, uroxe, älg, säl vid kust",
    )),
)

NEOLITHIC_LAND_COVER = LandCover(
    landscape="Öppnare landskap, tidigt jordbruk",
    vegetation="Blandskog, betesmarker, tidiga åkrar",
    fauna="Tamboskap, kronhjort, vildsvin, häst (tam)",
)

# Temperate -> boreal substitutions for northern regions
BOREAL_VEGETATION = ("Ek, alm, lind", "Tall, gran, björk")
BOREAL_FAUNA = ("uroxe", "ren")


class GeoAnalysis(BaseModel):
    """Reconstruction of one coordinate in one stone-age period."""

    period: StonePeriod
    elevation: float
    region: Region
    sea_status: SeaStatusResult
    landscape: str
    vegetation: str
    fauna: str


def _seabed_cover(sea_status: SeaStatusResult) -> LandCover:
    phase = sea_status.sea_phase
    freshwater = phase.salinity == Salinity.FRESHWATER
    return LandCover(
        landscape=f"Havsbotten under {phase.name}",
        vegetation="Alger, vass vid stränder" if freshwater else "Marina alger, tång",
        fauna="Sötvattensfisk, säl (vid kuster)" if freshwater else "Torsk, sill, säl, tumlare",
    )


def select_land_cover(years_bp: int, region: Region) -> LandCover:
    """Land cover for an emerged location."""
    cover = NEOLITHIC_LAND_COVER
    for lower_bound, bracket_cover in LAND_COVER_BY_AGE:
        if years_bp > lower_bound:
            cover = bracket_cover
            break

    if region.is_northern:
        cover = LandCover(
            landscape=cover.landscape,
            vegetation=cover.vegetation.replace(*BOREAL_VEGETATION),
            fauna=cover.fauna.replace(*BOREAL_FAUNA),
        )
    return cover


def build_geo_analysis(lat: float, lng: float, period: StonePeriod, elevation: float) -> GeoAnalysis:
    """Pure reconstruction for a known present-day elevation."""
    region = get_region(lat, lng)
    sea_status = calculate_historical_sea_status(elevation, lat, lng, period.years_bp)

    if sea_status.was_underwater:
        cover = _seabed_cover(sea_status)
    else:
        cover = select_land_cover(period.years_bp, region)

    return GeoAnalysis(
        period=period,
        elevation=elevation,
        region=region,
        sea_status=sea_status,
        landscape=cover.landscape,
        vegetation=cover.vegetation,
        fauna=cover.fauna,
    )


async def analyze_location(
    lat: float,
    lng: float,
    period_id: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> GeoAnalysis:
    """
    Full geological analysis for a coordinate and stone-age period id.

    Unknown period ids resolve to Äldre Atlantikum. The elevation lookup falls
    back to a regional estimate, so this never fails for finite coordinates.
    """
    period = get_stone_period(period_id)
    elevation = await fetch_elevation(lat, lng, client)
    analysis = build_geo_analysis(lat, lng, period, elevation)

    logger.info(
        "Geology analysed",
        period=period.id,
        region=analysis.region.value,
        elevation=elevation,
        underwater=analysis.sea_status.was_underwater,
    )
    return analysis


async def analyze_all_periods(
    lat: float, lng: float, concurrency: Optional[int] = None
) -> List[GeoAnalysis]:
    """
    Analyse every stone-age period for one coordinate.

    Periods are evaluated concurrently; ``concurrency`` bounds the number of
    simultaneous elevation lookups.
    """
    semaphore = asyncio.Semaphore(concurrency or settings.elevation_concurrency)

    async with httpx.AsyncClient(timeout=settings.elevation_timeout_seconds) as client:

        async def run(period: StonePeriod) -> GeoAnalysis:
            async with semaphore:
                return await analyze_location(lat, lng, period.id, client)

        return list(await asyncio.gather(*(run(period) for period in STONE_AGE_PERIODS)))
