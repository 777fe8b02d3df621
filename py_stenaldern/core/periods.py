"""
Historical period catalogs.

Two static catalogs are kept here:
- TIME_PERIODS: cultural periods in Sweden from the Mesolithic to 1950, with
  landscape and feature vocabularies used by the prompt composer
- STONE_AGE_PERIODS: geological periods (years before present) used by the
  sea-level and uplift reconstruction

Years are calendar years (negative = BCE). Years BP count back from 2000.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Era(str, Enum):
    """Coarse era grouping of time periods."""

    PREHISTORIC = "prehistoric"
    ANCIENT = "ancient"
    MEDIEVAL = "medieval"
    EARLY_MODERN = "early_modern"
    MODERN = "modern"


ERA_NAMES: Dict[Era, str] = {
    Era.PREHISTORIC: "Förhistorisk tid",
    Era.ANCIENT: "Forntiden",
    Era.MEDIEVAL: "Medeltiden",
    Era.EARLY_MODERN: "Tidigmodern tid",
    Era.MODERN: "Modern tid",
}


class Landscape(BaseModel):
    """Landscape description per location type."""

    model_config = ConfigDict(frozen=True)

    rural: str
    coastal: str
    urban: str


class PeriodFeatures(BaseModel):
    """What can be expected in a scene from the period."""

    model_config = ConfigDict(frozen=True)

    buildings: str
    people: str
    animals: str
    vegetation: str
    technology: str


class TimePeriod(BaseModel):
    """A cultural period in Swedish history."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    era: Era
    year_start: int = Field(description="Calendar year, negative = BCE")
    year_end: int
    year_label: str
    description: str
    landscape: Landscape
    features: PeriodFeatures
    color: str = Field(description="UI colour")


class StonePeriod(BaseModel):
    """A geological period used by the sea-level reconstruction."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    years_bp: int = Field(description="Representative years before present")
    year_range: str
    culture: str


TIME_PERIODS: Tuple[TimePeriod, ...] = (
    # Stone Age
    TimePeriod(
        id="stone_early",
        name="Äldre stenåldern",
        era=Era.PREHISTORIC,
        year_start=-10000,
        year_end=-4000,
        year_label="10 000 - 4 000 f.Kr.",
        description="Jägare och samlare. Isen har nyligen smält. Människor lever i små grupper och följer viltet.",
        landscape=Landscape(
            rural="Vild urskog med tall och björk, sjöar och våtmarker, inga vägar eller byggnader",
            coastal="Klippiga stränder, sälkolonier, fiskare i enkla kanoter av trä",
            urban="Inga städer existerar - endast tillfälliga lägerplatser",
        ),
        features=PeriodFeatures(
            buildings="Tillfälliga hyddor av skinn och grenar, vindskydd",
            people="Jägare klädda i djurhudar, små familjegrupper",
            animals="Älg, ren, vildsvin, säl, varg, björn",
            vegetation="Tall, björk, vide, bärbuskar, vass vid vatten",
            technology="Stenverktyg, pilbågar, fiskeredskap av ben",
        ),
        color="#8B4513",
    ),
    TimePeriod(
        id="stone_middle",
        name="Mellanneolitikum",
        era=Era.PREHISTORIC,
        year_start=-4000,
        year_end=-2500,
        year_label="4 000 - 2 500 f.Kr.",
        description="De första bönderna. Jordbruk och boskapsskötsel börjar. Megalitgravar byggs.",
        landscape=Landscape(
            rural="Öppnare landskap, små åkrar, betesmarker, lövskog",
            coastal="Skalbankar vid kusten, fiskelägen, enkla båtar",
            urban="Inga städer - större byar med långhus",
        ),
        features=PeriodFeatures(
            buildings="Långhus av trä och lera, megalitgravar (dösar, gånggrifter)",
            people="Bönder i enkla linnekläder, kvinnor med keramikkärl",
            animals="Tamboskap (kor, får, getter), hundar, vilda djur i skogen",
            vegetation="Odlade fält med korn, lövängar, ek och hassel",
            technology="Slipade stenyxor, keramik, enkla plogar",
        ),
        color="#A0522D",
    ),
    TimePeriod(
        id="stone_late",
        name="Yngre stenåldern",
        era=Era.PREHISTORIC,
        year_start=-2500,
        year_end=-1700,
        year_label="2 500 - 1 700 f.Kr.",
        description="Stridsyxekulturen. Mer hierarkiska samhällen. Handel över stora avstånd.",
        landscape=Landscape(
            rural="Jordbrukslandskap med gårdar, gravhögar på kullar",
            coastal="Handelsplatser vid kusten, större båtar",
            urban="Inga städer - men större bosättningar",
        ),
        features=PeriodFeatures(
            buildings="Större gårdar, hövdingahus, gravhögar",
            people="Hövdingar med stridsyxor, bondefamiljer, handelsmän",
            animals="Hästar börjar användas, kor, får, hundar",
            vegetation="Mer öppet odlingslandskap, ek och bok",
            technology="Stridsyxor, bättre keramik, begynnande metallkunskap",
        ),
        color="#CD853F",
    ),
    # Bronze Age
    TimePeriod(
        id="bronze",
        name="Bronsåldern",
        era=Era.ANCIENT,
        year_start=-1700,
        year_end=-500,
        year_label="1 700 - 500 f.Kr.",
        description="Brons används för vapen och smycken. Rika hövdingadömen. Hällristningar.",
        landscape=Landscape(
            rural="Öppna betesmarker, gravrösen på höjder, hällristningar vid vatten",
            coastal="Handelshamnar, bronsgjutning, skepp avbildade på hällar",
            urban="Inga städer - men centralplatser för handel och kult",
        ),
        features=PeriodFeatures(
            buildings="Stora trähus, kultplatser, gravrösen av sten",
            people="Hövdingar med bronssvärd, kvinnor med spiralsmycken, präster",
            animals="Hästar (även för ridning), oxar för dragning, får, grisar",
            vegetation="Öppnare landskap, ljunghedar, ekar på kullar",
            technology="Bronssvärd, yxor, smycken, tvåhjuliga vagnar, skepp",
        ),
        color="#CD7F32",
    ),
    # Iron Age
    TimePeriod(
        id="iron_early",
        name="Äldre järnåldern",
        era=Era.ANCIENT,
        year_start=-500,
        year_end=400,
        year_label="500 f.Kr. - 400 e.Kr.",
        description="Järn ersätter brons. Romersk påverkan. Runor börjar användas.",
        landscape=Landscape(
            rural="Välorganiserade gårdar, stensträngar, gravfält",
            coastal="Handelsplatser, kontakt med romarriket",
            urban="Inga städer - men stora gårdar och handelsplatser",
        ),
        features=PeriodFeatures(
            buildings="Långhus med eldstad, förrådsbodar, gravfält med högar",
            people="Bönder, smeder, hövdingar med järnsvärd, trälar",
            animals="Hästar, kor, grisar, får, höns, hundar",
            vegetation="Jordbrukslandskap, ängar, mindre skog",
            technology="Järnverktyg, vävstolar, runor, mynt (importerade)",
        ),
        color="#708090",
    ),
    TimePeriod(
        id="iron_late",
        name="Vendeltid",
        era=Era.ANCIENT,
        year_start=400,
        year_end=800,
        year_label="400 - 800 e.Kr.",
        description="Strax före vikingatiden. Rika gravfynd. Hjälmar och svärd av hög kvalitet.",
        landscape=Landscape(
            rural="Stormannagårdar, kultplatser, skeppssättningar",
            coastal="Handelsplatser som Helgö, tidiga hamnar",
            urban="Handelsplatser börjar likna små städer",
        ),
        features=PeriodFeatures(
            buildings="Hallbyggnader för hövdingar, smedjor, båtskjul",
            people="Kungar och hövdingar i praktfulla kläder, skalder, smeder",
            animals="Hästar (statussymbol), hundar, hökar för jakt",
            vegetation="Odlingslandskap, heliga lundar",
            technology="Praktfulla hjälmar, mönstervällade svärd, guldsmide",
        ),
        color="#4682B4",
    ),
    # Viking Age
    TimePeriod(
        id="viking",
        name="Vikingatiden",
        era=Era.MEDIEVAL,
        year_start=800,
        year_end=1050,
        year_label="800 - 1050 e.Kr.",
        description="Vikingar seglar över haven. Handel och plundring. Birka och Sigtuna grundas.",
        landscape=Landscape(
            rural="Välorganiserade byar, runstenar vid vägar",
            coastal="Hamnar med vikingaskepp, varv, handelsplatser",
            urban="Birka, Sigtuna - tidiga handelsstäder med hus av trä",
        ),
        features=PeriodFeatures(
            buildings="Långhus, hovsalar, stavkyrkor (sent), bryggor",
            people="Vikingar med yxor och sköldar, köpmän, trälar, völvor",
            animals="Hästar, hundar, grisar, kor, höns, korpar (Odins fåglar)",
            vegetation="Odlingslandskap, äng och hage, skog för skeppsbygge",
            technology="Vikingaskepp, svärd, runstenar, silvermynt, vävnader",
        ),
        color="#2F4F4F",
    ),
    # Middle Ages
    TimePeriod(
        id="medieval_early",
        name="Tidig medeltid",
        era=Era.MEDIEVAL,
        year_start=1050,
        year_end=1300,
        year_label="1050 - 1300 e.Kr.",
        description="Kristendomen etableras. Kyrkor byggs i sten. Städer grundas.",
        landscape=Landscape(
            rural="Byar med teglagårdar, kyrkor i varje socken",
            coastal="Fisklägen, Hansakontakter börjar",
            urban="Stockholm grundas, stenkyrkor, torg och handelsgator",
        ),
        features=PeriodFeatures(
            buildings="Romanska stenkyrkor, kloster, enkla trähus, borgar",
            people="Munkar och nunnor, riddare, bönder, köpmän, kungar",
            animals="Hästar, oxar, får, getter, hundar, duvslag",
            vegetation="Odlingslandskap, äng, klostergårdar med örtagårdar",
            technology="Järnplogar, vattenkvarnar, stenkyrkor, pergament",
        ),
        color="#8B0000",
    ),
    TimePeriod(
        id="medieval_late",
        name="Sen medeltid",
        era=Era.MEDIEVAL,
        year_start=1300,
        year_end=1500,
        year_label="1300 - 1500 e.Kr.",
        description="Hanseatisk handel. Digerdöden. Unionsstrid.",
        landscape=Landscape(
            rural="Ödebyar efter pesten, skogsåterväxt",
            coastal="Hansakontor, fiskhandel",
            urban="Befästa städer, kyrkor, rådhus, köpmannahus",
        ),
        features=PeriodFeatures(
            buildings="Gotiska kyrkor, stenhus i städer, borgar",
            people="Hansaköpmän, riddare, bönder, borgare, tiggarmunkar",
            animals="Hästar, oxar, grisar, höns, hundar",
            vegetation="Mer skog (efter pesten), odlingsmark",
            technology="Armborst, krutvapen (sent), tryckpress (sent)",
        ),
        color="#800020",
    ),
    # Swedish Empire
    TimePeriod(
        id="early_modern",
        name="Stormaktstiden",
        era=Era.EARLY_MODERN,
        year_start=1611,
        year_end=1721,
        year_label="1611 - 1721 e.Kr.",
        description="Sverige är en stormakt. Barock. Gustav II Adolf och Karl XII.",
        landscape=Landscape(
            rural="Reglerade byar, adelsgods, enkla torparstugor",
            coastal="Örlogshamnar, varv, fästningar",
            urban="Regelbundna rutnätsstäder, barockkyrkor, slott",
        ),
        features=PeriodFeatures(
            buildings="Barockslott, kyrkor med torn, korsvirkeshus, torp",
            people="Soldater i uniformer, adelsmän med peruker, bönder, präster",
            animals="Hästar (kavalleri), oxar, kor, höns",
            vegetation="Odlingslandskap, trädgårdar i barockstil",
            technology="Musköter, kanoner, segelskepp, tryckta böcker",
        ),
        color="#4169E1",
    ),
    # 19th century
    TimePeriod(
        id="industrial",
        name="1800-talet",
        era=Era.MODERN,
        year_start=1800,
        year_end=1900,
        year_label="1800 - 1900 e.Kr.",
        description="Industrialisering. Emigration till Amerika. Järnvägen byggs.",
        landscape=Landscape(
            rural="Skiftade byar, röda stugor, stenmurar",
            coastal="Fisklägen, sommargäster börjar komma",
            urban="Fabriker, arbetarbostäder, stationssamhällen",
        ),
        features=PeriodFeatures(
            buildings="Röda trästugor, fabriker, järnvägsstationer, kyrkor",
            people="Fabriksarbetare, bönder, borgare i hög hatt, emigranter",
            animals="Hästar för transport, kor, grisar, höns",
            vegetation="Öppet jordbrukslandskap, björkalléer",
            technology="Ånglok, telegrafer, fotografi, gaslyktor",
        ),
        color="#556B2F",
    ),
    # Early 20th century
    TimePeriod(
        id="early_1900s",
        name="Tidigt 1900-tal",
        era=Era.MODERN,
        year_start=1900,
        year_end=1950,
        year_label="1900 - 1950 e.Kr.",
        description="Folkhemmet börjar byggas. Bilar dyker upp. Världskrigen.",
        landscape=Landscape(
            rural="Jordbruk med traktorer börjar, landsbygden avfolkas",
            coastal="Badorter, fiskeindustri",
            urban="Funktionalism, spårvagnar, varuhus, biografer",
        ),
        features=PeriodFeatures(
            buildings="Funkishus, folkhemslägenheter, vattentorn, biografer",
            people="Arbetare med keps, kvinnor i 20-talsklänningar, barn i skoluniform",
            animals="Hästar (fortfarande vanliga), kor, hundar, katter",
            vegetation="Trädgårdsstäder, kolonilotter, parker",
            technology="Bilar (T-Ford), cyklar, radio, telefon, el i hemmen",
        ),
        color="#2E8B57",
    ),
)

STONE_AGE_PERIODS: Tuple[StonePeriod, ...] = (
    StonePeriod(id="late_glacial", name="Senglacial tid", years_bp=12000, year_range="14000-11700 BP", culture="Hamburgkulturen"),
    StonePeriod(id="preboreal", name="Preboreal", years_bp=10500, year_range="11700-10200 BP", culture="Maglemosekulturen"),
    StonePeriod(id="boreal", name="Boreal", years_bp=9000, year_range="10200-8000 BP", culture="Maglemosekulturen"),
    StonePeriod(id="atlantic_early", name="Äldre Atlantikum", years_bp=7000, year_range="8000-6000 BP", culture="Kongemosekulturen"),
    StonePeriod(id="atlantic_late", name="Yngre Atlantikum", years_bp=5500, year_range="6000-5000 BP", culture="Ertebøllekulturen"),
    StonePeriod(id="subboreal", name="Subboreal (Neolitikum)", years_bp=4000, year_range="5000-2500 BP", culture="Trattbägarkulturen"),
)

DEFAULT_STONE_PERIOD = STONE_AGE_PERIODS[3]

# Cultural period -> geological period whose sea level applies
TIME_TO_STONE_PERIOD: Dict[str, str] = {
    "stone_early": "boreal",
    "stone_middle": "atlantic_early",
    "stone_late": "atlantic_late",
    "bronze": "subboreal",
    "iron_early": "subboreal",
    "iron_late": "subboreal",
}

GEOLOGY_ERAS = (Era.PREHISTORIC, Era.ANCIENT)

BP_REFERENCE_YEAR = 2000


def get_period_by_id(period_id: Optional[str]) -> Optional[TimePeriod]:
    """Find a time period by id."""
    return next((p for p in TIME_PERIODS if p.id == period_id), None)


def resolve_period(period_id: Optional[str]) -> TimePeriod:
    """Time period by id, falling back to the first catalog period."""
    return get_period_by_id(period_id) or TIME_PERIODS[0]


def get_periods_by_era() -> Dict[Era, List[TimePeriod]]:
    """Group time periods by era, keeping catalog order."""
    grouped: Dict[Era, List[TimePeriod]] = {}
    for period in TIME_PERIODS:
        grouped.setdefault(period.era, []).append(period)
    return grouped


def get_stone_period(period_id: Optional[str]) -> StonePeriod:
    """Geological period by id; unknown ids resolve to Äldre Atlantikum."""
    return next((p for p in STONE_AGE_PERIODS if p.id == period_id), DEFAULT_STONE_PERIOD)


def stone_period_for(time_period_id: str) -> StonePeriod:
    """Geological period matching a cultural period."""
    return get_stone_period(TIME_TO_STONE_PERIOD.get(time_period_id, DEFAULT_STONE_PERIOD.id))


def requires_geology(period: TimePeriod) -> bool:
    """Sea-level reconstruction only matters for prehistoric and ancient periods."""
    return period.era in GEOLOGY_ERAS


def year_to_bp(year: int) -> int:
    """Approximate years before present for a calendar year."""
    if year < 0:
        return abs(year) + BP_REFERENCE_YEAR
    return BP_REFERENCE_YEAR - year
