"""Sport type normalization utilities.

Maps platform-specific activity types (Intervals.icu, Whoop) onto one
shared vocabulary, and maps that vocabulary onto planned-workout
disciplines.
"""

from __future__ import annotations

from app.models.planned import Discipline

OTHER = "Other"

ACTIVITY_TYPE_MAP: dict[str, str] = {
    # Intervals.icu types
    "ride": "Cycling",
    "cycling": "Cycling",
    "virtualride": "Cycling",
    "bike": "Cycling",
    "run": "Running",
    "running": "Running",
    "virtualrun": "Running",
    "swim": "Swimming",
    "swimming": "Swimming",
    "alpineski": "Skiing",
    "alpine skiing": "Skiing",
    "backcountryski": "Skiing",
    "nordicski": "Skiing",
    "skiing": "Skiing",
    "hike": "Hiking",
    "hiking": "Hiking",
    "rowing": "Rowing",
    "row": "Rowing",
    "weighttraining": "Strength",
    "strength": "Strength",
    "workout": "Strength",
    # Whoop sport names
    "functional fitness": "Strength",
    "hiit": "Strength",
    "weightlifting": "Strength",
    "strength trainer": "Strength",
    "cross country skiing": "Skiing",
    "downhill skiing": "Skiing",
}

DISCIPLINE_BY_ACTIVITY_TYPE: dict[str, Discipline] = {
    "Cycling": Discipline.BIKE,
    "Running": Discipline.RUN,
    "Swimming": Discipline.SWIM,
}


def normalize_activity_type(activity_type: str | None) -> str:
    """Normalize a platform activity type to the shared vocabulary.

    Args:
        activity_type: Raw type (e.g. 'VirtualRide', 'functional-fitness')

    Returns:
        One of Cycling, Running, Swimming, Skiing, Hiking, Rowing, Strength or Other
    """
    if not activity_type:
        return OTHER
    key = activity_type.lower().replace("_", " ").replace("-", " ").strip()
    return ACTIVITY_TYPE_MAP.get(key, OTHER)


def are_activity_types_compatible(first: str, second: str) -> bool:
    """Two normalized types match when equal, or when either is unknown."""
    if first == second:
        return True
    return OTHER in (first, second)


def discipline_for_activity_type(activity_type: str | None) -> Discipline | None:
    """Map a raw activity type to a planned-workout discipline, if it has one."""
    return DISCIPLINE_BY_ACTIVITY_TYPE.get(normalize_activity_type(activity_type))
