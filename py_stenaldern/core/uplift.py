"""
Post-glacial land uplift model for Sweden.

This module implements:
- Coarse region classification from a latitude/longitude bounding-box cascade
- Present-day uplift rates per region (mm/year)
- Cumulative uplift since a given number of years before present (BP)

Uplift was much faster right after the ice sheet retreated. The model
approximates the decay with three phases; the multipliers and breakpoints are
calibration constants and must be kept as-is to reproduce published outputs.
"""

from enum import Enum
from typing import Dict, Tuple

from ..utils.geo import round_half_up


class Region(str, Enum):
    """Uplift regions, used only as keys into rate and elevation tables."""

    HOGA_KUSTEN = "höga_kusten"
    NORRLAND_KUST = "norrland_kust"
    NORRLAND_INLAND = "norrland_inland"
    SVEALAND_KUST = "svealand_kust"
    STOCKHOLM = "stockholm"
    GOTLAND = "gotland"
    GOTALAND_VAST = "götaland_väst"
    GOTALAND_OST = "götaland_öst"
    SKANE = "skåne"
    DANMARK = "danmark"

    @property
    def is_northern(self) -> bool:
        """Boreal regions where temperate forest vocabulary does not apply."""
        return self in (Region.NORRLAND_KUST, Region.NORRLAND_INLAND, Region.HOGA_KUSTEN)


# Present-day uplift in mm/year (Lantmäteriet / SGU)
LAND_UPLIFT_RATES: Dict[Region, float] = {
    Region.HOGA_KUSTEN: 8.5,  # fastest in the world
    Region.NORRLAND_KUST: 7.5,
    Region.NORRLAND_INLAND: 8.0,
    Region.SVEALAND_KUST: 5.0,
    Region.STOCKHOLM: 4.5,
    Region.GOTLAND: 2.0,
    Region.GOTALAND_VAST: 3.0,
    Region.GOTALAND_OST: 2.5,
    Region.SKANE: 0.5,
    Region.DANMARK: 0.0,
}

DEFAULT_UPLIFT_RATE = 3.0
FALLBACK_REGION = Region.SVEALAND_KUST

# (phase start in years BP, max years in phase, rate multiplier), oldest first
UPLIFT_PHASES: Tuple[Tuple[int, int, float], ...] = (
    (10000, 4000, 12.0),  # fast phase right after deglaciation
    (5000, 5000, 4.0),  # medium phase
    (0, 5000, 1.0),  # present-day rate
)


def get_region(lat: float, lng: float) -> Region:
    """
    Classify a coordinate into an uplift region.

    The cascade is Sweden-centric and coarse; it is total and falls back to
    svealand_kust when nothing matches (e.g. NaN input).
    """
    if 62.5 <= lat <= 63.5 and 17 <= lng <= 19:
        return Region.HOGA_KUSTEN

    # Norrland
    if lat > 63:
        return Region.NORRLAND_INLAND if lng < 16 else Region.NORRLAND_KUST
    if 60 < lat <= 63:
        return Region.NORRLAND_KUST if lng > 17 else Region.SVEALAND_KUST

    # Svealand
    if 58.5 < lat <= 60:
        if 17 < lng < 19.5:
            return Region.STOCKHOLM
        return Region.SVEALAND_KUST

    # Gotland sits inside the Götaland latitude band, so test it first
    if 56.9 < lat < 58 and 18 < lng < 19.5:
        return Region.GOTLAND

    # Götaland
    if 56 < lat <= 58.5:
        return Region.GOTALAND_VAST if lng < 14 else Region.GOTALAND_OST

    if 55.3 < lat <= 56:
        return Region.SKANE

    if lat <= 55.3 or lng < 11:
        return Region.DANMARK

    return FALLBACK_REGION


def get_uplift_rate(region: Region) -> float:
    """Present-day uplift rate for a region in mm/year."""
    return LAND_UPLIFT_RATES.get(region, DEFAULT_UPLIFT_RATE)


def calculate_total_uplift(lat: float, lng: float, years_bp: float) -> int:
    """
    Calculate total land uplift since ``years_bp`` years before present.

    Years are consumed from the oldest phase downwards: at most 4000 years
    beyond 10000 BP at 12x the present rate, the span 5000-10000 BP at 4x and
    the remaining years at 1x. Years older than 14000 BP add nothing.

    Args:
        lat: Latitude in degrees
        lng: Longitude in degrees
        years_bp: Years before present (negative values count as 0)

    Returns:
        Uplift in whole metres
    """
    rate = get_uplift_rate(get_region(lat, lng))
    remaining = max(0.0, float(years_bp))

    total_uplift = 0.0
    for phase_start, max_years, multiplier in UPLIFT_PHASES:
        if remaining > phase_start:
            phase_years = min(remaining - phase_start, max_years)
            total_uplift += phase_years * rate * multiplier / 1000
            remaining = phase_start

    return int(round_half_up(total_uplift))
