"""Tests for the historical sea-status resolver."""

import pytest

from py_stenaldern.core.sea_status import calculate_historical_sea_status
from py_stenaldern.core.uplift import calculate_total_uplift

SKANE = (55.605, 13.0038)
DANMARK = (54.5, 10.0)
STOCKHOLM = (59.3293, 18.0686)


class TestSeaStatus:
    """Test submerged/emerged resolution."""

    @pytest.mark.parametrize("elevation", [-30.0, -1.0, 0.0, 3.0, 10.0, 55.5, 400.0])
    @pytest.mark.parametrize("years_bp", [0, 4000, 7000, 9500, 12000])
    def test_consistency(self, elevation, years_bp):
        lat, lng = STOCKHOLM
        status = calculate_historical_sea_status(elevation, lat, lng, years_bp)

        assert status.uplift_meters == calculate_total_uplift(lat, lng, years_bp)
        assert status.historical_elevation == elevation - status.uplift_meters
        assert status.was_underwater == (status.historical_elevation < status.sea_level)
        assert status.sea_level == status.sea_phase.sea_level

    def test_low_uplift_stays_dry(self):
        """10 m today with no uplift stays above the +5 m Littorina sea."""
        status = calculate_historical_sea_status(10.0, *DANMARK, 7000)

        assert status.uplift_meters == 0
        assert status.was_underwater is False
        assert "Denna plats var land, 5 meter över Littorinahavet (tidig)s yta." in status.description

    def test_submerged(self):
        """3 m today minus 7 m of uplift lies below the +5 m sea."""
        status = calculate_historical_sea_status(3.0, *SKANE, 7000)

        assert status.was_underwater is True
        assert status.historical_elevation == -4.0
        assert status.depth == 9.0
        assert status.description.startswith("Denna plats låg 9 meter under Littorinahavet (tidig)s yta.")
        assert "Vattnet var salt, liknande Nordsjön." in status.description

    def test_emerged_mentions_uplift(self):
        status = calculate_historical_sea_status(100.0, *SKANE, 7000)

        assert status.was_underwater is False
        assert "cirka 7 meter" in status.description
