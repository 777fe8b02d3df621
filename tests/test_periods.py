"""Tests for the period catalogs."""

import pytest

from py_stenaldern.core.periods import (
    ERA_NAMES,
    STONE_AGE_PERIODS,
    TIME_PERIODS,
    Era,
    get_period_by_id,
    get_periods_by_era,
    get_stone_period,
    requires_geology,
    resolve_period,
    stone_period_for,
    year_to_bp,
)


class TestTimePeriods:
    """Test the cultural period catalog."""

    def test_ids_are_unique(self):
        ids = [period.id for period in TIME_PERIODS]
        assert len(ids) == len(set(ids))

    def test_catalog_is_chronological(self):
        starts = [period.year_start for period in TIME_PERIODS]
        assert starts == sorted(starts)
        for period in TIME_PERIODS:
            assert period.year_start < period.year_end

    def test_lookup(self):
        assert get_period_by_id("viking").name == "Vikingatiden"
        assert get_period_by_id("unknown") is None

    def test_resolve_defaults_to_first_period(self):
        assert resolve_period("unknown") == TIME_PERIODS[0]
        assert resolve_period(None) == TIME_PERIODS[0]

    def test_grouped_by_era(self):
        grouped = get_periods_by_era()

        assert list(grouped) == list(Era)
        assert [p.id for p in grouped[Era.PREHISTORIC]] == ["stone_early", "stone_middle", "stone_late"]
        assert sum(len(periods) for periods in grouped.values()) == len(TIME_PERIODS)
        assert set(ERA_NAMES) == set(grouped)

    @pytest.mark.parametrize("period_id,expected", [
        ("stone_early", True),
        ("bronze", True),
        ("iron_late", True),
        ("viking", False),
        ("early_1900s", False),
    ])
    def test_requires_geology(self, period_id, expected):
        assert requires_geology(get_period_by_id(period_id)) is expected


class TestStonePeriods:
    """Test the geological period catalog."""

    def test_unknown_id_defaults_to_atlantic_early(self):
        assert get_stone_period("unknown").id == "atlantic_early"
        assert get_stone_period(None).id == "atlantic_early"

    def test_ordered_oldest_first(self):
        years = [period.years_bp for period in STONE_AGE_PERIODS]
        assert years == sorted(years, reverse=True)

    @pytest.mark.parametrize("period_id,expected", [
        ("stone_early", "boreal"),
        ("stone_middle", "atlantic_early"),
        ("stone_late", "atlantic_late"),
        ("bronze", "subboreal"),
        ("iron_early", "subboreal"),
        ("iron_late", "subboreal"),
        ("viking", "atlantic_early"),
    ])
    def test_stone_period_for(self, period_id, expected):
        assert stone_period_for(period_id).id == expected


class TestYearConversion:
    """Test calendar year to years BP."""

    @pytest.mark.parametrize("year,expected", [
        (-10000, 12000),
        (-4000, 6000),
        (-1, 2001),
        (0, 2000),
        (800, 1200),
        (1900, 100),
    ])
    def test_year_to_bp(self, year, expected):
        assert year_to_bp(year) == expected
