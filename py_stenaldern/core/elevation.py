"""
Elevation lookup with a regional fallback.

The lookup calls an Open-Elevation compatible service. Every failure
(transport error, non-2xx status, malformed body) is turned into an
``ElevationLookup`` carrying the error, and ``fetch_elevation`` substitutes a
static per-region estimate. Nothing in this module raises to the caller.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

import httpx
import structlog

from ..config import settings
from .uplift import Region, get_region

logger = structlog.get_logger()

# Rough mean elevation per uplift region, metres
ELEVATION_ESTIMATES: Dict[Region, float] = {
    Region.HOGA_KUSTEN: 50,
    Region.NORRLAND_KUST: 30,
    Region.NORRLAND_INLAND: 300,
    Region.SVEALAND_KUST: 20,
    Region.STOCKHOLM: 15,
    Region.GOTLAND: 30,
    Region.GOTALAND_VAST: 50,
    Region.GOTALAND_OST: 100,
    Region.SKANE: 50,
    Region.DANMARK: 20,
}

DEFAULT_ELEVATION = 50.0


@dataclass(frozen=True)
class ElevationLookup:
    """Outcome of an elevation service call."""

    elevation: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.elevation is not None


def estimate_elevation(lat: float, lng: float) -> float:
    """Static regional elevation estimate in metres."""
    return float(ELEVATION_ESTIMATES.get(get_region(lat, lng), DEFAULT_ELEVATION))


def _parse_elevation(data) -> float:
    elevation = float(data["results"][0]["elevation"])
    if not math.isfinite(elevation):
        raise ValueError(f"non-finite elevation {elevation}")
    return elevation


async def lookup_elevation(
    lat: float, lng: float, client: Optional[httpx.AsyncClient] = None
) -> ElevationLookup:
    """
    Query the elevation service once, without retries.

    Args:
        lat: Latitude in degrees
        lng: Longitude in degrees
        client: Optional shared client; a short-lived one is created otherwise

    Returns:
        ElevationLookup with either an elevation or an error message
    """
    url = f"{settings.elevation_api_url}?locations={lat},{lng}"
    timeout = settings.elevation_timeout_seconds

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                response = await owned_client.get(url)
        else:
            response = await client.get(url, timeout=timeout)
        response.raise_for_status()
        elevation = _parse_elevation(response.json())
    except httpx.HTTPError as exc:
        return ElevationLookup(error=f"elevation service unavailable: {exc}")
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        return ElevationLookup(error=f"malformed elevation response: {exc!r}")

    return ElevationLookup(elevation=elevation)


async def fetch_elevation(
    lat: float, lng: float, client: Optional[httpx.AsyncClient] = None
) -> float:
    """Elevation in metres, falling back to the regional estimate on any failure."""
    result = await lookup_elevation(lat, lng, client)
    if result.ok:
        return result.elevation

    estimate = estimate_elevation(lat, lng)
    logger.warning(
        "Elevation lookup failed, using regional estimate",
        lat=lat,
        lng=lng,
        error=result.error,
        estimate=estimate,
    )
    return estimate
