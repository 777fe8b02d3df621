"""
Geographic and rounding utilities.

Distances are great-circle distances on a spherical Earth. Rounding follows
the half-up convention used for every user-visible number (depths, uplift,
distances) so that 0.5 always rounds away from zero toward +inf.
"""

import math
from typing import Union

import numpy as np

EARTH_RADIUS_KM = 6371.0

ArrayLike = Union[float, np.ndarray]


def haversine_km(lat1: ArrayLike, lng1: ArrayLike, lat2: ArrayLike, lng2: ArrayLike) -> ArrayLike:
    """
    Great-circle distance in kilometres.

    Accepts scalars or numpy arrays (broadcast against each other), so a
    single query point can be measured against a whole catalog at once.

    Args:
        lat1, lng1: First point(s) in degrees
        lat2, lng2: Second point(s) in degrees

    Returns:
        Distance(s) in km
    """
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    d_phi = np.radians(np.subtract(lat2, lat1))
    d_lambda = np.radians(np.subtract(lng2, lng1))

    a = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties toward +inf (Python's round() uses banker's rounding)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def format_year(year: int) -> str:
    """Format a calendar year the Swedish way: 500 f.Kr. / 1252 e.Kr."""
    if year < 0:
        return f"{abs(year)} f.Kr."
    return f"{year} e.Kr."
