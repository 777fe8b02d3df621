"""
Historical reconstruction engine.
"""

from .uplift import Region, get_region, get_uplift_rate, calculate_total_uplift
from .sea_phases import Salinity, SeaPhase, BALTIC_SEA_PHASES, get_sea_phase
from .sea_status import SeaStatusResult, calculate_historical_sea_status
from .location import (
    CityInfo,
    LocationAnalysis,
    LocationType,
    SWEDISH_CITIES,
    analyze_location_type,
    get_city_description,
    is_near_coast,
)
from .periods import (
    TimePeriod,
    StonePeriod,
    TIME_PERIODS,
    STONE_AGE_PERIODS,
    get_period_by_id,
    get_stone_period,
    resolve_period,
)
from .elevation import fetch_elevation, estimate_elevation
from .geology import GeoAnalysis, analyze_location, analyze_all_periods, build_geo_analysis
from .clothing import PeriodClothing, get_period_clothing
from .prompts import generate_image_prompt, get_historical_exclusions

__all__ = ['Region', 'get_region', 'get_uplift_rate', 'calculate_total_uplift',
           'Salinity', 'SeaPhase', 'BALTIC_SEA_PHASES', 'get_sea_phase',
           'SeaStatusResult', 'calculate_historical_sea_status',
           'CityInfo', 'LocationAnalysis', 'LocationType', 'SWEDISH_CITIES',
           'analyze_location_type', 'get_city_description', 'is_near_coast',
           'TimePeriod', 'StonePeriod', 'TIME_PERIODS', 'STONE_AGE_PERIODS',
           'get_period_by_id', 'get_stone_period', 'resolve_period',
           'fetch_elevation', 'estimate_elevation',
           'GeoAnalysis', 'analyze_location', 'analyze_all_periods', 'build_geo_analysis',
           'PeriodClothing', 'get_period_clothing',
           'generate_image_prompt', 'get_historical_exclusions']
