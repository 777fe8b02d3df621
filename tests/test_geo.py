"""Tests for geographic and formatting helpers."""

import numpy as np
import pytest

from py_stenaldern.config import Settings
from py_stenaldern.utils.geo import format_year, haversine_km, round_half_up


class TestRoundHalfUp:
    """Test half-up rounding."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1.0),
        (2.5, 3.0),
        (416.5, 417.0),
        (-2.5, -2.0),
        (2.49, 2.0),
    ])
    def test_whole_numbers(self, value, expected):
        assert round_half_up(value) == expected

    def test_one_decimal(self):
        assert round_half_up(1.25, 1) == 1.3


class TestHaversine:
    """Test great-circle distances."""

    def test_same_point(self):
        assert haversine_km(59.0, 18.0, 59.0, 18.0) == pytest.approx(0.0)

    def test_one_degree_of_latitude(self):
        assert haversine_km(59.0, 18.0, 60.0, 18.0) == pytest.approx(111.19, abs=0.01)

    def test_broadcasts_over_catalog(self):
        distances = haversine_km(59.0, 18.0, np.array([59.0, 60.0]), np.array([18.0, 18.0]))

        assert distances.shape == (2,)
        assert distances[0] < distances[1]


class TestFormatYear:
    """Test Swedish year formatting."""

    def test_bce(self):
        assert format_year(-500) == "500 f.Kr."

    def test_ce(self):
        assert format_year(1252) == "1252 e.Kr."


class TestSettings:
    """Test settings helpers."""

    def test_cors_origins(self):
        config = Settings(allowed_origins="http://localhost:3000, https://stenaldern.app,")
        assert config.cors_origins == ["http://localhost:3000", "https://stenaldern.app"]
