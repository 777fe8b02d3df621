"""
Location type detection: urban, coastal or rural.

This module implements:
- A catalog of Swedish settlements with approximate founding years
- Nearest-settlement lookup (vectorised haversine over the catalog)
- A bounding-box coastline heuristic
- Period-aware narratives for the three location types

The coastline boxes and the 5 km / 2 km urban thresholds are deliberately
coarse approximations.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

import numpy as np
import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..utils.geo import format_year, haversine_km, round_half_up

logger = structlog.get_logger()


class HistoricalType(str, Enum):
    """Origin class of a settlement."""

    ANCIENT_SETTLEMENT = "ancient_settlement"
    MEDIEVAL_TOWN = "medieval_town"
    EARLY_MODERN = "early_modern"
    INDUSTRIAL = "industrial"
    MODERN = "modern"


class LocationType(str, Enum):
    """Classification of a location for scene composition."""

    URBAN = "urban"
    COASTAL = "coastal"
    RURAL = "rural"


class CityInfo(BaseModel):
    """A named settlement."""

    model_config = ConfigDict(frozen=True)

    name: str
    lat: float
    lng: float
    founded_year: int = Field(description="Approximate founding year, negative = BCE")
    historical_type: HistoricalType
    population: int = Field(description="Approximate present-day population")

    def existed_in(self, year: int) -> bool:
        """Whether the settlement existed in ``year``."""
        return self.founded_year <= year


class LocationAnalysis(BaseModel):
    """Location classification for one coordinate and year."""

    type: LocationType
    nearest_city: Optional[CityInfo] = None
    distance_to_city: Optional[float] = Field(default=None, description="km, one decimal")
    city_existed_in_period: bool = False
    historical_description: str = ""


def _city(name, lat, lng, founded_year, historical_type, population) -> CityInfo:
    return CityInfo(
        name=name,
        lat=lat,
        lng=lng,
        founded_year=founded_year,
        historical_type=historical_type,
        population=population,
    )


_ANCIENT = HistoricalType.ANCIENT_SETTLEMENT
_MEDIEVAL = HistoricalType.MEDIEVAL_TOWN
_EARLY_MODERN = HistoricalType.EARLY_MODERN

SWEDISH_CITIES: Tuple[CityInfo, ...] = (
    # Large cities
    _city("Stockholm", 59.3293, 18.0686, 1252, _MEDIEVAL, 1000000),
    _city("Göteborg", 57.7089, 11.9746, 1621, _EARLY_MODERN, 580000),
    _city("Malmö", 55.6050, 13.0038, 1275, _MEDIEVAL, 350000),
    _city("Uppsala", 59.8586, 17.6389, 1164, _MEDIEVAL, 170000),
    _city("Linköping", 58.4108, 15.6214, 1287, _MEDIEVAL, 160000),
    _city("Västerås", 59.6099, 16.5448, 1000, _ANCIENT, 155000),
    _city("Örebro", 59.2753, 15.2134, 1200, _MEDIEVAL, 150000),
    _city("Norrköping", 58.5877, 16.1924, 1350, _MEDIEVAL, 140000),
    _city("Helsingborg", 56.0465, 12.6945, 1085, _MEDIEVAL, 145000),
    _city("Jönköping", 57.7826, 14.1618, 1284, _MEDIEVAL, 140000),
    # Medium-sized cities
    _city("Lund", 55.7047, 13.1910, 990, _ANCIENT, 125000),
    _city("Umeå", 63.8258, 20.2630, 1622, _EARLY_MODERN, 130000),
    _city("Gävle", 60.6749, 17.1413, 1446, _MEDIEVAL, 100000),
    _city("Borås", 57.7210, 12.9401, 1621, _EARLY_MODERN, 110000),
    _city("Sundsvall", 62.3908, 17.3069, 1621, _EARLY_MODERN, 100000),
    _city("Eskilstuna", 59.3666, 16.5077, 1659, _EARLY_MODERN, 105000),
    _city("Karlstad", 59.4022, 13.5115, 1584, _EARLY_MODERN, 95000),
    _city("Växjö", 56.8777, 14.8091, 1342, _MEDIEVAL, 95000),
    _city("Halmstad", 56.6745, 12.8578, 1307, _MEDIEVAL, 100000),
    _city("Luleå", 65.5848, 22.1547, 1621, _EARLY_MODERN, 80000),
    # Prehistoric and Viking Age sites
    _city("Gamla Uppsala", 59.8979, 17.6330, -500, _ANCIENT, 5000),
    _city("Birka", 59.3333, 17.5500, 750, _ANCIENT, 100),
    _city("Sigtuna", 59.6178, 17.7256, 970, _ANCIENT, 10000),
    _city("Visby", 57.6348, 18.2948, 900, _ANCIENT, 25000),
    _city("Kalmar", 56.6634, 16.3566, 1100, _MEDIEVAL, 70000),
    _city("Skara", 58.3864, 13.4384, 1000, _ANCIENT, 20000),
    _city("Falun", 60.6065, 15.6355, 1641, _EARLY_MODERN, 60000),
    # Coastal towns
    _city("Ystad", 55.4295, 13.8200, 1244, _MEDIEVAL, 30000),
    _city("Trelleborg", 55.3758, 13.1566, 1257, _MEDIEVAL, 45000),
    _city("Varberg", 57.1057, 12.2508, 1300, _MEDIEVAL, 35000),
    _city("Karlskrona", 56.1612, 15.5869, 1680, _EARLY_MODERN, 65000),
    _city("Hudiksvall", 61.7271, 17.1053, 1582, _EARLY_MODERN, 40000),
)

URBAN_RADIUS_KM = 5.0
FUTURE_CITY_RADIUS_KM = 2.0

# Bounding boxes approximating the Swedish coast
COASTAL_BOXES: Tuple[Tuple[str, Callable[[float, float], bool]], ...] = (
    ("west_coast", lambda lat, lng: lng < 12.5 and 55.5 <= lat <= 59),
    ("skane_south_east", lambda lat, lng: lat < 56.5 and 13.5 < lng < 15),
    ("blekinge_kalmar", lambda lat, lng: 55.5 <= lat < 58 and 15 < lng < 17),
    ("stockholm_archipelago", lambda lat, lng: 58.5 <= lat < 60.5 and lng > 18),
    ("norrland_coast", lambda lat, lng: lat >= 60 and 17 < lng < 24),
    ("gotland", lambda lat, lng: 56.9 <= lat <= 58.4 and 18 <= lng <= 19.5),
)

COASTAL_NARRATIVES: Tuple[Tuple[int, str], ...] = (
    (-8000, "Du befinner dig vid den forna Östersjökusten, där jägare-samlare fiskar och jagar säl."),
    (-4000, "Kusten här är rik på fisk och säl. Stenåldersmänniskor har lägerplatser längs stranden."),
    (800, "Ett kustsamhälle med fiskare och handelsmän. Båtar syns i viken."),
)
COASTAL_NARRATIVE_LATEST = "En livlig kust med handel och fiske."

RURAL_NARRATIVES: Tuple[Tuple[int, str], ...] = (
    (-4000, "Vild urskog så långt ögat når. Jägare och samlare rör sig genom landskapet."),
    (-1700, "Jordbruksbygd med små gårdar och betesmark. Röjda gläntor i skogen."),
    (800, "Jordbrukslandskap med byar och gårdar. Gravhögar syns på kullarna."),
)
RURAL_NARRATIVE_LATEST = "Landsbygd med byar, gårdar och kyrkor."

# Era buckets for city descriptions, checked in this order
CITY_ERA_BUCKETS: Tuple[Tuple[int, str], ...] = (
    (1900, "modern"),
    (1800, "industrial"),
    (1600, "early_modern"),
    (1000, "medieval"),
    (800, "viking"),
)

CITY_DESCRIPTIONS: Dict[str, Dict[str, str]] = {
    "Stockholm": {
        "medieval": "Stockholms gamla stad med trähus, kyrkor och smala gränder. Handel vid Stortorget.",
        "early_modern": "Stormaktstidens Stockholm med slottet under byggnad, Tyska kyrkan och livlig hamn.",
        "industrial": "Stockholms stenstad växer. Ångslupar på Strömmen, gaslyktor längs gatorna.",
        "modern": "Modern storstad med spårvagnar, bilar och höga stenhus.",
    },
    "Göteborg": {
        "early_modern": "Den nygrundade fästningsstaden Göteborg med vallar, kanaler och holländska köpmän.",
        "industrial": "Göteborgs hamn full av segelfartyg. Arbetarbostäder växer upp kring fabrikerna.",
        "modern": "Industristad med varv, hamnar och Liseberg.",
    },
    "Uppsala": {
        "medieval": "Uppsala domkyrka reser sig över staden. Präster, studenter och pilgrimer i gatorna.",
        "early_modern": "Universitetsstad med studentnationer och bokhandlar.",
        "industrial": "Universitetsstaden Uppsala med järnvägsstation och växande förort.",
        "modern": "Modern universitetsstad med cykelvägar och forskningscentra.",
    },
    "Visby": {
        "medieval": "Hansastaden Visby i sin glans. Köpmän från hela Östersjön, ringmur under byggnad.",
        "early_modern": "Visby efter Hansans fall - en mindre lantstad inom de mäktiga murarna.",
        "industrial": "Visby som badort och turistmål. Ruiner från storhetstiden.",
        "modern": "Världsarvsstad med välbevarad ringmur och sommargäster.",
    },
    "Birka": {
        "viking": "Vikingatida handelsstad på Björkö. Köpmän, hantverkare, och skepp från fjärran länder.",
    },
    "Gamla Uppsala": {
        "prehistoric": "De mäktiga kungshögarna. Hednatempel och blot till de gamla gudarna.",
        "viking": "Svearikets religiösa centrum. Kungshögarna och det stora templet.",
        "medieval": "Det gamla Uppsala - nu i skuggan av nya Uppsala. Kyrkan står på den forna kultplatsen.",
    },
    "Sigtuna": {
        "viking": "Sveriges första stad. Kyrkor byggs, mynt präglas, kristendomen breder ut sig.",
        "medieval": "Sigtuna som kungasäte och kyrkligt centrum. Kloster och stenkyrkor.",
    },
    "Lund": {
        "medieval": "Ärkebiskopens stad. Domkyrkan, kloster och den nordiska kyrkans centrum.",
        "early_modern": "Universitetet grundas. Studenter och professorer i de medeltida gatorna.",
        "modern": "Modern universitetsstad med bevarat medeltida centrum.",
    },
}

GENERIC_CITY_DESCRIPTIONS: Tuple[Tuple[int, str], ...] = (
    (1900, "{name} - en modern svensk stad."),
    (1800, "{name} under industrialiseringen."),
    (1600, "{name} under stormaktstiden."),
    (1000, "Den medeltida staden {name}."),
)
GENERIC_CITY_EARLIEST = "{name} som tidig bosättning."


def is_near_coast(lat: float, lng: float) -> bool:
    """Coarse coastline test for Sweden."""
    return any(in_box(lat, lng) for _, in_box in COASTAL_BOXES)


def find_nearest_city(
    lat: float, lng: float, cities: Sequence[CityInfo] = SWEDISH_CITIES
) -> Tuple[Optional[CityInfo], Optional[float]]:
    """
    Nearest catalog city and its distance in km.

    Returns (None, None) for an empty catalog.
    """
    if not cities:
        return None, None

    city_lats = np.array([city.lat for city in cities])
    city_lngs = np.array([city.lng for city in cities])
    distances = haversine_km(lat, lng, city_lats, city_lngs)

    index = int(np.argmin(distances))
    return cities[index], float(distances[index])


def _bracket_narrative(year_start: int, brackets: Sequence[Tuple[int, str]], latest: str) -> str:
    for threshold, narrative in brackets:
        if year_start < threshold:
            return narrative
    return latest


def _urban_narrative(city: CityInfo) -> str:
    if city.historical_type == HistoricalType.ANCIENT_SETTLEMENT:
        return f"Du befinner dig vid {city.name}, en av Skandinaviens äldsta bosättningar."
    if city.historical_type == HistoricalType.MEDIEVAL_TOWN:
        return f"Du befinner dig i {city.name}, en medeltida handelsstad."
    return f"Du befinner dig i {city.name}."


def _future_city_narrative(city: CityInfo, year_start: int, near_coast: bool) -> str:
    founded = format_year(city.founded_year)
    if year_start < -4000:
        return f"Här, där {city.name} en dag kommer att grundas ({founded}), finns nu endast vildmark."
    surroundings = "en kustremsa med fiskelägen" if near_coast else "glest befolkad bygd"
    return f"Denna plats kommer senare att bli {city.name} (grundat {founded}), men nu är det {surroundings}."


def analyze_location_type(
    lat: float,
    lng: float,
    year_start: int,
    cities: Sequence[CityInfo] = SWEDISH_CITIES,
) -> LocationAnalysis:
    """
    Classify a location as urban, coastal or rural for a given year.

    A point is urban when it lies within 5 km of a settlement that existed in
    ``year_start``. A point within 2 km of a settlement founded later keeps
    its coastal/rural type but its description mentions the future town.

    Args:
        lat: Latitude in degrees
        lng: Longitude in degrees
        year_start: Calendar year (negative = BCE)
        cities: Settlement catalog to search

    Returns:
        LocationAnalysis
    """
    nearest_city, distance = find_nearest_city(lat, lng, cities)
    city_existed = nearest_city.existed_in(year_start) if nearest_city else False
    near_coast = is_near_coast(lat, lng)

    threshold = URBAN_RADIUS_KM if city_existed else FUTURE_CITY_RADIUS_KM
    within_threshold = nearest_city is not None and distance < threshold

    if within_threshold and city_existed:
        location_type = LocationType.URBAN
        description = _urban_narrative(nearest_city)
    elif near_coast:
        location_type = LocationType.COASTAL
        description = _bracket_narrative(year_start, COASTAL_NARRATIVES, COASTAL_NARRATIVE_LATEST)
    else:
        location_type = LocationType.RURAL
        description = _bracket_narrative(year_start, RURAL_NARRATIVES, RURAL_NARRATIVE_LATEST)

    if within_threshold and not city_existed:
        description = _future_city_narrative(nearest_city, year_start, near_coast)

    logger.debug(
        "Location classified",
        type=location_type.value,
        nearest_city=nearest_city.name if nearest_city else None,
        distance_km=distance,
    )

    return LocationAnalysis(
        type=location_type,
        nearest_city=nearest_city,
        distance_to_city=round_half_up(distance, 1) if distance is not None else None,
        city_existed_in_period=city_existed,
        historical_description=description,
    )


def get_city_description(city: CityInfo, year_start: int) -> str:
    """City-specific description for a year."""
    if not city.existed_in(year_start):
        return f"{city.name} existerar inte än - grundas {format_year(city.founded_year)}"

    city_data = CITY_DESCRIPTIONS.get(city.name)
    if city_data is None:
        for min_year, template in GENERIC_CITY_DESCRIPTIONS:
            if year_start >= min_year:
                return template.format(name=city.name)
        return GENERIC_CITY_EARLIEST.format(name=city.name)

    for min_year, bucket in CITY_ERA_BUCKETS:
        if year_start >= min_year and city_data.get(bucket):
            return city_data[bucket]
    if city_data.get("prehistoric"):
        return city_data["prehistoric"]

    return f"{city.name} under denna tidsperiod."
