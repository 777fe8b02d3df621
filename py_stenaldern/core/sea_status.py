"""
Historical sea status for a coordinate.

Combines the uplift model with the Baltic sea-phase table: the land surface at
``years_bp`` sat ``uplift`` metres lower than today, and the place was under
water when that surface lay below the phase's sea level.
"""

from pydantic import BaseModel, ConfigDict, Field

from .sea_phases import Salinity, SeaPhase, get_sea_phase
from .uplift import calculate_total_uplift
from ..utils.geo import round_half_up

SALINITY_SENTENCES = {
    Salinity.FRESHWATER: "Vattnet var sött.",
    Salinity.BRACKISH: "Vattnet var bräckt.",
    Salinity.MARINE: "Vattnet var salt, liknande Nordsjön.",
}


class SeaStatusResult(BaseModel):
    """Whether and how deep a place was submerged at a point in time."""

    model_config = ConfigDict(frozen=True)

    was_underwater: bool
    historical_elevation: float = Field(description="Elevation then, metres relative to today's sea level")
    sea_level: float = Field(description="Sea level of the phase, metres relative to today")
    sea_phase: SeaPhase
    uplift_meters: int = Field(description="Land uplift since then, whole metres")
    description: str

    @property
    def depth(self) -> float:
        """Water depth in metres; negative when the place was land."""
        return self.sea_level - self.historical_elevation


def calculate_historical_sea_status(
    current_elevation: float, lat: float, lng: float, years_bp: float
) -> SeaStatusResult:
    """
    Resolve the sea status of a coordinate ``years_bp`` years before present.

    Args:
        current_elevation: Present-day elevation in metres (may be negative)
        lat: Latitude in degrees
        lng: Longitude in degrees
        years_bp: Years before present

    Returns:
        SeaStatusResult with a Swedish narrative
    """
    uplift = calculate_total_uplift(lat, lng, years_bp)
    sea_phase = get_sea_phase(years_bp)

    historical_elevation = current_elevation - uplift
    was_underwater = historical_elevation < sea_phase.sea_level

    if was_underwater:
        depth = sea_phase.sea_level - historical_elevation
        description = (
            f"Denna plats låg {round_half_up(depth):.0f} meter under {sea_phase.name}s yta. "
            f"{sea_phase.description}. {SALINITY_SENTENCES[sea_phase.salinity]}"
        )
    else:
        height = historical_elevation - sea_phase.sea_level
        description = (
            f"Denna plats var land, {round_half_up(height):.0f} meter över {sea_phase.name}s yta. "
            f"Sedan dess har marken höjts cirka {uplift} meter på grund av landhöjning efter istiden."
        )

    return SeaStatusResult(
        was_underwater=was_underwater,
        historical_elevation=historical_elevation,
        sea_level=sea_phase.sea_level,
        sea_phase=sea_phase,
        uplift_meters=uplift,
        description=description,
    )
