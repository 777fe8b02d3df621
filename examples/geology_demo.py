"""
Example printing the geological history of a coordinate.

Usage:
    python examples/geology_demo.py 62.8 18.0
"""

import argparse
import asyncio

from py_stenaldern.core import analyze_all_periods, analyze_location_type, get_region
from py_stenaldern.core.periods import TIME_PERIODS
from py_stenaldern.utils import format_year


async def main(lat: float, lng: float):
    region = get_region(lat, lng)
    print(f"Location: {lat:.4f}, {lng:.4f} (uplift region: {region.value})")
    print()

    analyses = await analyze_all_periods(lat, lng)
    print(f"Present-day elevation: {analyses[0].elevation:.0f} m")
    print()

    for analysis in analyses:
        status = analysis.sea_status
        state = "under water" if status.was_underwater else "land"
        print(f"{analysis.period.name} ({analysis.period.years_bp} BP, {analysis.period.culture})")
        print(f"  {status.sea_phase.name}: {state}, uplift since then {status.uplift_meters} m")
        print(f"  {status.description}")
        print(f"  Landscape: {analysis.landscape}")
        print(f"  Vegetation: {analysis.vegetation}")
        print(f"  Fauna: {analysis.fauna}")
        print()

    print("Settlement history:")
    for period in TIME_PERIODS:
        location = analyze_location_type(lat, lng, period.year_start)
        print(f"  {format_year(period.year_start):>12}  {location.type.value:<8} {location.historical_description}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the geological history of a coordinate")
    parser.add_argument("lat", type=float, nargs="?", default=59.3293)
    parser.add_argument("lng", type=float, nargs="?", default=18.0686)
    args = parser.parse_args()
    asyncio.run(main(args.lat, args.lng))
