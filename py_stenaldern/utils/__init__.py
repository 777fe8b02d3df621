"""
Small numeric and formatting helpers shared by the core modules.
"""

from .geo import EARTH_RADIUS_KM, haversine_km, round_half_up, format_year

__all__ = ['EARTH_RADIUS_KM', 'haversine_km', 'round_half_up', 'format_year']
