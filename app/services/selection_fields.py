"""
Shape-tolerant accessors for selection and profile fields.

Every selection field arrives either in its simple form (a string, number or
list) or its enhanced form (a nested object). Analyzers read fields only
through these helpers so scoring rules never see the difference.
"""
from typing import Iterable, Optional

from app.models.selection import (
    DurationSelection,
    EquipmentSelection,
    FocusSelection,
    RatingSelection,
    UserProfile,
    WorkoutSelections,
)


DEFAULT_FOCUS = "general"

# Duration buckets (minutes)
SHORT_MAX_MINUTES = 20
MEDIUM_MAX_MINUTES = 45

# Energy buckets on the 1-10 scale used by enhanced ratings
LOW_ENERGY_MAX = 3
MODERATE_ENERGY_MAX = 7
SIMPLE_RATING_SCALE = 2  # simple 1-5 ratings are doubled onto 1-10

BEGINNER_LEVELS = frozenset({"beginner", "novice", "new to exercise", "new"})
INTERMEDIATE_LEVELS = frozenset({"intermediate", "some experience", "some-experience"})
ADVANCED_LEVELS = frozenset({"advanced", "adaptive", "advanced athlete"})


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in text (callers lowercase both sides)."""
    return any(keyword in text for keyword in keywords)


# --- Selections ---

def focus_value(selections: WorkoutSelections) -> str:
    """Focus as entered, for display."""
    focus = selections.focus
    if isinstance(focus, FocusSelection):
        return focus.focus or DEFAULT_FOCUS
    if isinstance(focus, str) and focus.strip():
        return focus
    return DEFAULT_FOCUS


def focus_key(selections: WorkoutSelections) -> str:
    """Lowercased focus, for keyword rules."""
    return focus_value(selections).lower()


def duration_minutes(selections: WorkoutSelections) -> Optional[float]:
    duration = selections.duration
    if isinstance(duration, DurationSelection):
        return duration.duration
    if isinstance(duration, (int, float)) and not isinstance(duration, bool):
        return float(duration)
    return None


def duration_bucket(selections: WorkoutSelections) -> str:
    """Normalize duration to "short" / "medium" / "long" (missing -> medium)."""
    minutes = duration_minutes(selections)
    if minutes is None:
        return "medium"
    if minutes <= SHORT_MAX_MINUTES:
        return "short"
    if minutes <= MEDIUM_MAX_MINUTES:
        return "medium"
    return "long"


def energy_rating(selections: WorkoutSelections) -> Optional[int]:
    """Energy rating on the 1-10 scale, or None when not given."""
    energy = selections.energy
    if isinstance(energy, RatingSelection):
        return energy.rating
    if isinstance(energy, int) and not isinstance(energy, bool):
        return energy * SIMPLE_RATING_SCALE
    return None


def energy_level(selections: WorkoutSelections) -> str:
    """Normalize energy to "low" / "moderate" / "high" (missing -> low)."""
    rating = energy_rating(selections)
    if not rating or rating <= LOW_ENERGY_MAX:
        return "low"
    if rating <= MODERATE_ENERGY_MAX:
        return "moderate"
    return "high"


def sleep_rating(selections: WorkoutSelections) -> Optional[int]:
    """Sleep quality rating (1-5), or None when not given."""
    sleep = selections.sleep
    if isinstance(sleep, RatingSelection):
        return sleep.rating
    if isinstance(sleep, int) and not isinstance(sleep, bool):
        return sleep
    return None


def selected_equipment(selections: WorkoutSelections) -> list[str]:
    equipment = selections.equipment
    if isinstance(equipment, EquipmentSelection):
        return list(equipment.specificEquipment)
    if isinstance(equipment, list):
        return list(equipment)
    return []


# --- Profile ---

def experience_level(profile: UserProfile) -> str:
    """Map a fitness level label to beginner / intermediate / advanced."""
    level = (profile.fitnessLevel or "").strip().lower()
    if level in INTERMEDIATE_LEVELS:
        return "intermediate"
    if level in ADVANCED_LEVELS:
        return "advanced"
    return "beginner"


def injuries(profile: UserProfile) -> list[str]:
    return list(profile.basicLimitations.injuries)


def available_equipment(profile: UserProfile, selections: WorkoutSelections = None) -> list[str]:
    """Profile equipment plus any equipment chosen for this workout, deduplicated."""
    combined = list(profile.basicLimitations.availableEquipment)
    if selections is not None:
        combined.extend(selected_equipment(selections))

    seen = set()
    result = []
    for item in combined:
        key = item.strip().lower()
        if key and key not in seen:
            seen.add(key)
            result.append(item)
    return result


def preferred_focus_areas(profile: UserProfile) -> list[str]:
    if profile.workoutHistory is None:
        return []
    return list(profile.workoutHistory.preferredFocusAreas)


def average_duration(profile: UserProfile) -> Optional[float]:
    if profile.workoutHistory is None:
        return None
    return profile.workoutHistory.averageDuration
