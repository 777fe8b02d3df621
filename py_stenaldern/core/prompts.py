"""
Image-generation prompts for historical scenes.

The composer turns a time period, a location classification and (for
prehistoric/ancient periods) a geological analysis into a single English
prompt. Historical accuracy is enforced with an additive exclusion list: the
earlier the period, the more modern things are explicitly forbidden.

All functions here are pure; identical inputs give identical prompts.
"""

from typing import List, Optional, Tuple

from .clothing import get_period_clothing
from .geology import GeoAnalysis
from .location import LocationAnalysis, LocationType, get_city_description
from .periods import TimePeriod
from .sea_phases import Salinity
from ..utils.geo import round_half_up

# Always excluded, whatever the period
BASE_EXCLUSIONS: Tuple[str, ...] = (
    "cars",
    "power lines",
    "asphalt roads",
    "plastic",
    "modern buildings",
    "street lights",
)

# (threshold, items): items are excluded when year_start < threshold.
# Ordered from latest to earliest so each step extends the previous list.
EXCLUSION_THRESHOLDS: Tuple[Tuple[int, Tuple[str, ...]], ...] = (
    (1900, ("automobiles", "electricity", "telephone poles", "concrete buildings")),
    (1800, ("factories", "steam engines", "iron bridges", "gas lamps")),
    (1600, ("baroque architecture", "wigs", "cannons", "printed books")),
    (1000, ("stone churches", "castles", "knights in armor", "windmills")),
    (400, ("Christian symbols", "runic stones with crosses", "longships with sails")),
    (-500, ("iron tools", "coins", "written text")),
    (-1700, ("bronze weapons", "wheeled carts", "horses for riding")),
    (-4000, ("farming", "domestic cattle", "pottery", "permanent houses")),
)

UNDERWATER_LIFE = {
    Salinity.FRESHWATER: (
        "Clear freshwater environment. Sandy or rocky bottom visible. "
        "Aquatic plants like pondweed and water lilies. Pike, perch, and bream swimming. "
        "NO trees, NO grass, NO land animals - this is completely underwater. "
    ),
    Salinity.BRACKISH: (
        "Murky brackish water with greenish tint and limited visibility. "
        "Seaweed, algae on rocks. Cod, herring, flounder near the bottom. "
        "NO trees, NO land vegetation - only marine and brackish water life. "
    ),
    Salinity.MARINE: (
        "Clear saltwater marine environment. "
        "Kelp and seaweed attached to rocks. Schools of herring, cod. Seals visible. "
        "NO trees, NO terrestrial plants - purely marine ecosystem. "
    ),
}

CLOSING_CLAUSE = (
    "Photorealistic, natural lighting, documentary style. "
    "Strict historical accuracy required. No anachronisms."
)


def get_historical_exclusions(year_start: int) -> List[str]:
    """Things that did not exist yet in ``year_start``."""
    exclusions = list(BASE_EXCLUSIONS)
    for threshold, items in EXCLUSION_THRESHOLDS:
        if year_start < threshold:
            exclusions.extend(items)
    return exclusions


def _underwater_scene(period: TimePeriod, geo_analysis: GeoAnalysis) -> str:
    sea_status = geo_analysis.sea_status
    depth = sea_status.sea_level - sea_status.historical_elevation

    prompt = "Underwater scene, viewing from beneath the water surface. "
    prompt += f"This location is submerged under {round_half_up(depth):.0f} meters of water. "
    prompt += f"Time period: {period.year_label}, {sea_status.sea_phase.name} in Scandinavia. "
    prompt += UNDERWATER_LIFE[sea_status.sea_phase.salinity]
    prompt += "Sunlight filtering down from the surface above, creating light rays through water. "
    prompt += "Realistic underwater photography style. Bubbles, particles in water. "
    return prompt


def _land_scene(period: TimePeriod, location_analysis: LocationAnalysis, view_description: str) -> str:
    features = period.features
    city = location_analysis.nearest_city

    prompt = f"Historical scene from {period.name} ({period.year_label}) in Scandinavia. "

    if location_analysis.type == LocationType.URBAN and location_analysis.city_existed_in_period and city:
        prompt += f"Urban scene in {city.name}: {period.landscape.urban}. "
        prompt += f"Architecture: ONLY {features.buildings}. "
        prompt += f"People: {features.people}. "
        prompt += f"{get_city_description(city, period.year_start)} "
    elif location_analysis.type == LocationType.COASTAL:
        prompt += f"Coastal Scandinavian scene: {period.landscape.coastal}. "
        prompt += f"Structures: ONLY {features.buildings}. "
        prompt += f"Coastal activity: fishing, {features.people}. "
    else:
        prompt += f"Rural Scandinavian landscape: {period.landscape.rural}. "
        prompt += f"Dwellings: ONLY {features.buildings}. "
        prompt += f"People: {features.people}. "

    prompt += f"Flora: ONLY {features.vegetation}. "
    prompt += f"Fauna: {features.animals}. "
    prompt += f"Tools and technology: ONLY {features.technology}. "
    prompt += f"CRITICAL - DO NOT INCLUDE: {', '.join(get_historical_exclusions(period.year_start))}. "

    if view_description:
        prompt += f"Match this composition: {view_description}. "
    return prompt


def _person_transformation(period: TimePeriod, person_description: str) -> str:
    clothing = get_period_clothing(period.year_start)
    return (
        "\n\nIMPORTANT - PERSON TRANSFORMATION: "
        f"There is a person in this image ({person_description}). "
        "KEEP their face, body position, and pose EXACTLY the same. "
        f"TRANSFORM their clothing, hairstyle, and accessories to match {period.name}: "
        f"{clothing.description}. "
        f"Hair: {clothing.hair}. "
        f"Accessories: {clothing.accessories}. "
        "DO NOT change the person's facial features, expression, or body position. "
        "ONLY change their outfit and hairstyle to be historically accurate. "
    )


def generate_image_prompt(
    period: TimePeriod,
    location_analysis: LocationAnalysis,
    geo_analysis: Optional[GeoAnalysis] = None,
    view_description: str = "",
    has_person: bool = False,
    person_description: str = "",
) -> str:
    """
    Build the image-generation prompt for a scene.

    Args:
        period: Cultural time period
        location_analysis: Urban/coastal/rural classification
        geo_analysis: Geological reconstruction, when the period needs one
        view_description: Composition of the uploaded photo, if any
        has_person: Whether the uploaded photo shows a person
        person_description: Appearance of that person

    Returns:
        Prompt text
    """
    if geo_analysis is not None and geo_analysis.sea_status.was_underwater:
        prompt = _underwater_scene(period, geo_analysis)
    else:
        prompt = _land_scene(period, location_analysis, view_description)

    if has_person and person_description:
        prompt += _person_transformation(period, person_description)

    return prompt + CLOSING_CLAUSE


def build_costume_change_prompt(period: TimePeriod) -> str:
    """Edit instruction for a photo with a person: change attire only."""
    clothing = get_period_clothing(period.year_start)
    return (
        "COSTUME CHANGE ONLY - Keep the exact same person, same face, same pose, same background composition.\n\n"
        f"TASK: Change ONLY this person's clothes and hair to {period.name} ({period.year_label}) Scandinavian style.\n\n"
        f"NEW OUTFIT: {clothing.description}\n"
        f"NEW HAIRSTYLE: {clothing.hair}\n"
        f"ACCESSORIES: {clothing.accessories}\n\n"
        "KEEP UNCHANGED: The person's face, skin, eyes, expression, body position, hands, and the general composition.\n\n"
        "This is like a movie costume department changing an actor's wardrobe - same person, different historical clothes."
    )


def build_photo_transform_prompt(period: TimePeriod, image_prompt: str) -> str:
    """Edit instruction for a landscape photo: same view, historical scene."""
    return (
        f"Transform this image to show how this exact location and view would have looked during "
        f"{period.name} ({period.year_label}) in Scandinavia. Keep the same composition, viewing angle, "
        f"and horizon line, but replace all modern elements with the historical scene. {image_prompt}"
    )
