"""
Baltic Sea development phases.

Six stages from the Baltic Ice Lake to today's brackish Baltic, each covering
a half-open interval [end_year, start_year) in years before present. The
intervals partition [0, 14000) without gaps; lookups outside that span
saturate to the most recent phase.
"""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Salinity(str, Enum):
    """Water salinity class of a sea phase."""

    FRESHWATER = "freshwater"
    BRACKISH = "brackish"
    MARINE = "marine"


class SeaPhase(BaseModel):
    """A Baltic Sea stage with its relative sea level."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Swedish name of the phase")
    start_year: int = Field(description="Start in years BP (exclusive upper bound)")
    end_year: int = Field(description="End in years BP (inclusive lower bound)")
    sea_level: float = Field(description="Metres relative to today's southern Baltic")
    salinity: Salinity
    description: str

    def contains(self, years_bp: float) -> bool:
        """Whether the phase covers ``years_bp``."""
        return self.end_year <= years_bp < self.start_year


BALTIC_SEA_PHASES: Tuple[SeaPhase, ...] = (
    SeaPhase(
        name="Baltiska issjön",
        start_year=14000,
        end_year=11700,
        sea_level=25,  # dammed by the ice
        salinity=Salinity.FRESHWATER,
        description="Sötvattenssjö dämmd av inlandsisen",
    ),
    SeaPhase(
        name="Yoldiahavet",
        start_year=11700,
        end_year=10700,
        sea_level=-25,  # rapid drainage
        salinity=Salinity.BRACKISH,
        description="Bräckt hav med förbindelse till Atlanten via Mellansverige",
    ),
    SeaPhase(
        name="Ancylussjön",
        start_year=10700,
        end_year=9000,
        sea_level=-10,
        salinity=Salinity.FRESHWATER,
        description="Stor sötvattensjö utan havsförbindelse",
    ),
    SeaPhase(
        name="Littorinahavet (tidig)",
        start_year=9000,
        end_year=6000,
        sea_level=5,  # transgression
        salinity=Salinity.MARINE,
        description="Salt hav, havsytan stiger, varmt klimat",
    ),
    SeaPhase(
        name="Littorinahavet (sen)",
        start_year=6000,
        end_year=4000,
        sea_level=3,
        salinity=Salinity.MARINE,
        description="Högsta havsnivån, varm period",
    ),
    SeaPhase(
        name="Postlittorina/Östersjön",
        start_year=4000,
        end_year=0,
        sea_level=0,
        salinity=Salinity.BRACKISH,
        description="Gradvis övergång till dagens bräckta Östersjö",
    ),
)


def get_sea_phase(years_bp: float) -> SeaPhase:
    """Sea phase for ``years_bp``; the most recent phase when out of range."""
    for phase in BALTIC_SEA_PHASES:
        if phase.contains(years_bp):
            return phase
    return BALTIC_SEA_PHASES[-1]
