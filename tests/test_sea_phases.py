"""Tests for the Baltic sea-phase table."""

import pytest

from py_stenaldern.core.sea_phases import BALTIC_SEA_PHASES, Salinity, get_sea_phase


class TestSeaPhases:
    """Test phase lookup."""

    def test_phases_partition_range(self):
        """Every year in [0, 14000) is covered by exactly one phase, later years by none."""
        for years_bp in range(0, 20001):
            matching = [phase for phase in BALTIC_SEA_PHASES if phase.contains(years_bp)]
            assert len(matching) == (1 if years_bp < 14000 else 0)
            assert get_sea_phase(years_bp) in BALTIC_SEA_PHASES

    def test_phases_are_contiguous(self):
        for older, younger in zip(BALTIC_SEA_PHASES, BALTIC_SEA_PHASES[1:]):
            assert older.end_year == younger.start_year

    @pytest.mark.parametrize("years_bp,expected", [
        (13000, "Baltiska issjön"),
        (11700, "Baltiska issjön"),
        (11699, "Yoldiahavet"),
        (10700, "Yoldiahavet"),
        (9000, "Ancylussjön"),
        (8999, "Littorinahavet (tidig)"),
        (6000, "Littorinahavet (tidig)"),
        (5999, "Littorinahavet (sen)"),
        (4000, "Littorinahavet (sen)"),
        (3999, "Postlittorina/Östersjön"),
        (0, "Postlittorina/Östersjön"),
    ])
    def test_boundaries(self, years_bp, expected):
        """A boundary year belongs to the phase whose inclusive lower bound it is."""
        assert get_sea_phase(years_bp).name == expected

    @pytest.mark.parametrize("years_bp", [14000, 20000, -1])
    def test_out_of_range_saturates(self, years_bp):
        assert get_sea_phase(years_bp) == BALTIC_SEA_PHASES[-1]

    def test_littorina_is_marine(self):
        phase = get_sea_phase(7000)
        assert phase.salinity == Salinity.MARINE
        assert phase.sea_level == 5
