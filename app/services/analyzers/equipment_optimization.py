"""
Equipment optimization: whether the selected focus makes good use of the
equipment and space the user has.

Equipment considered is the profile's available equipment plus anything
chosen for this workout.
"""
from app.models.selection import AnalysisContext, FactorStatus, UserProfile, WorkoutSelections
from app.services import selection_fields as fields
from app.services.analyzers.base import BASE_SCORE, FactorAnalyzer, SubScore


STRENGTH_FOCUS = ("strength", "muscle", "power")
CARDIO_FOCUS = ("cardio", "endurance", "sweat")
FLEXIBILITY_FOCUS = ("flexibility", "mobility", "stretch")
GENERAL_FOCUS = ("general", "fitness")
BODYWEIGHT_FOCUS = ("bodyweight", "general", "flexibility")
LARGE_SPACE_FOCUS = ("cardio", "endurance", "circuit")
SPACE_EFFICIENT_FOCUS = ("strength", "bodyweight", "flexibility")

STRENGTH_EQUIPMENT = ("dumbbells", "barbell", "resistance bands", "kettlebell", "weight")
CARDIO_EQUIPMENT = ("treadmill", "bike", "elliptical", "rower", "cardio")
FLEXIBILITY_EQUIPMENT = ("yoga mat", "foam roller", "stretching strap", "block")
LARGE_EQUIPMENT = ("treadmill", "bike", "elliptical", "rower", "rack", "bench")
HIGH_QUALITY_EQUIPMENT = ("barbell", "rack", "bench", "treadmill", "elliptical")
BASIC_EQUIPMENT = ("dumbbells", "resistance bands", "yoga mat")

REQUIRED_EQUIPMENT = {
    "strength": ("dumbbells", "barbell", "resistance bands", "kettlebell"),
    "cardio": ("treadmill", "bike", "elliptical", "rower"),
    "flexibility": ("yoga mat", "foam roller", "stretching strap"),
}

OPEN_LOCATIONS = ("gym", "outdoor", "park")


def _has_any(equipment: list[str], kinds) -> bool:
    return any(fields.contains_any(item.lower(), kinds) for item in equipment)


def _required_equipment(focus: str) -> tuple:
    if fields.contains_any(focus, STRENGTH_FOCUS):
        return REQUIRED_EQUIPMENT["strength"]
    if fields.contains_any(focus, CARDIO_FOCUS):
        return REQUIRED_EQUIPMENT["cardio"]
    if fields.contains_any(focus, FLEXIBILITY_FOCUS):
        return REQUIRED_EQUIPMENT["flexibility"]
    return ()


def _alternative_focus(equipment: list[str]) -> str:
    if _has_any(equipment, STRENGTH_EQUIPMENT):
        return "Strength Training"
    if _has_any(equipment, CARDIO_EQUIPMENT):
        return "Cardio"
    if _has_any(equipment, FLEXIBILITY_EQUIPMENT):
        return "Flexibility"
    return "General Fitness"


class EquipmentOptimizationAnalyzer(FactorAnalyzer):
    """Analyzes how well selections use the available equipment and space."""

    name = "equipmentOptimization"
    weight = 0.15
    description = "Analyzes how well selections optimize the use of available equipment"
    impacts = {
        "excellent": "Your selections will maximize the effectiveness of your available equipment.",
        "good": "Your selections will generally work well with your equipment.",
        "warning": "Your selections may not optimally utilize your equipment.",
        "poor": "Your selections may not work effectively with your available equipment.",
    }

    def checks(self, profile: UserProfile, selections: WorkoutSelections, context: AnalysisContext):
        equipment = fields.available_equipment(profile, selections)
        focus = fields.focus_value(selections)
        return [
            (self.availability_match(equipment, focus), 0.4),
            (self.workout_type_optimization(equipment, focus), 0.3),
            (self.space_constraints(profile, context, equipment, focus), 0.2),
            (self.quality_utilization(equipment, focus), 0.1),
        ]

    def availability_match(self, equipment: list[str], focus: str) -> SubScore:
        focus_key = focus.lower()
        result = SubScore(BASE_SCORE)

        if not equipment:
            result.details.append("No equipment specified - assuming bodyweight-only workouts")
            if fields.contains_any(focus_key, STRENGTH_FOCUS + CARDIO_FOCUS):
                result.score -= 0.3
                result.details.append(f"{focus} focus may require equipment not specified")
                result.suggestions.append(
                    'Consider "Bodyweight" or "General Fitness" focus for equipment-free workouts'
                )
            return result

        required = _required_equipment(focus_key)
        owned = {item.lower() for item in equipment}

        if not required:
            result.score += 0.1
            result.details.append(f"{focus} focus works well with your available equipment")
            return result

        match = sum(1 for item in required if item in owned) / len(required)
        if match >= 0.8:
            result.score += 0.2
            result.details.append(f"Excellent equipment match for {focus} focus")
        elif match >= 0.6:
            result.score += 0.1
            result.details.append(f"Good equipment match for {focus} focus")
        elif match >= 0.4:
            result.score -= 0.1
            result.details.append(f"Moderate equipment match for {focus} focus")
        else:
            result.score -= 0.3
            result.details.append(f"Poor equipment match for {focus} focus")
            result.suggestions.append(
                f"Consider {_alternative_focus(equipment)} for better equipment utilization"
            )

        for item in required:
            if item in owned:
                result.details.append(f"{item} available for {focus} focus")
            else:
                result.details.append(f"{item} may be needed for optimal {focus} training")

        return result

    def workout_type_optimization(self, equipment: list[str], focus: str) -> SubScore:
        focus_key = focus.lower()
        result = SubScore(BASE_SCORE)

        if not equipment:
            result.details.append("No equipment available - bodyweight focus is optimal")
            if fields.contains_any(focus_key, BODYWEIGHT_FOCUS):
                result.score += 0.1
                result.details.append(f"{focus} focus is perfect for equipment-free training")
            return result

        if fields.contains_any(focus_key, STRENGTH_FOCUS):
            if _has_any(equipment, STRENGTH_EQUIPMENT):
                result.score += 0.2
                result.details.append(f"{focus} focus optimally uses your strength equipment")
            else:
                result.score -= 0.2
                result.details.append(f"{focus} focus may not utilize your equipment effectively")
                result.suggestions.append(
                    'Consider "General Fitness" or "Bodyweight" for better equipment utilization'
                )
        elif fields.contains_any(focus_key, CARDIO_FOCUS):
            if _has_any(equipment, CARDIO_EQUIPMENT):
                result.score += 0.2
                result.details.append(f"{focus} focus optimally uses your cardio equipment")
            else:
                result.score -= 0.1
                result.details.append(f"{focus} focus may not utilize your equipment effectively")
                result.suggestions.append(
                    'Consider "Strength" or "General Fitness" for better equipment utilization'
                )
        elif fields.contains_any(focus_key, FLEXIBILITY_FOCUS):
            if _has_any(equipment, FLEXIBILITY_EQUIPMENT):
                result.score += 0.1
                result.details.append(f"{focus} focus uses your flexibility equipment well")
            else:
                result.details.append(f"{focus} focus works well with minimal equipment")
        elif fields.contains_any(focus_key, GENERAL_FOCUS):
            result.score += 0.1
            result.details.append(f"{focus} focus adapts well to your available equipment")

        return result

    def space_constraints(
        self,
        profile: UserProfile,
        context: AnalysisContext,
        equipment: list[str],
        focus: str,
    ) -> SubScore:
        focus_key = focus.lower()
        needs_space = fields.contains_any(focus_key, LARGE_SPACE_FOCUS)
        result = SubScore(BASE_SCORE)

        if needs_space and self.has_open_space(profile, context):
            result.details.append(f"{focus} focus has the space it needs at your location")
            return result

        if needs_space:
            result.score -= 0.2
            result.details.append(f"{focus} focus may require significant space")
            result.suggestions.append('Consider "Compact" or "General Fitness" for space-efficient workouts')
            if _has_any(equipment, LARGE_EQUIPMENT):
                result.score -= 0.1
                result.details.append("Large equipment may limit workout space")
        elif fields.contains_any(focus_key, SPACE_EFFICIENT_FOCUS):
            result.score += 0.1
            result.details.append(f"{focus} focus is space-efficient")

        return result

    def quality_utilization(self, equipment: list[str], focus: str) -> SubScore:
        focus_key = focus.lower()
        result = SubScore(BASE_SCORE)

        if not equipment:
            result.details.append("No equipment to optimize - bodyweight focus is appropriate")
            return result

        if _has_any(equipment, HIGH_QUALITY_EQUIPMENT):
            if fields.contains_any(focus_key, STRENGTH_FOCUS):
                result.score += 0.2
                result.details.append(f"{focus} focus optimally uses your high-quality equipment")
            else:
                result.score -= 0.1
                result.details.append(f"{focus} focus may not utilize your high-quality equipment effectively")
                result.suggestions.append('Consider "Strength" or "Advanced" focus for better equipment utilization')
        elif _has_any(equipment, BASIC_EQUIPMENT):
            if fields.contains_any(focus_key, GENERAL_FOCUS + FLEXIBILITY_FOCUS):
                result.score += 0.1
                result.details.append(f"{focus} focus works well with your basic equipment")

        return result

    @staticmethod
    def has_open_space(profile: UserProfile, context: AnalysisContext) -> bool:
        """True when the user trains somewhere large-space workouts fit."""
        if context.environmentalFactors and context.environmentalFactors.location == "outdoor":
            return True
        locations = [location.lower() for location in profile.basicLimitations.availableLocations]
        return any(fields.contains_any(location, OPEN_LOCATIONS) for location in locations)

    def reasoning(self, status: FactorStatus, profile: UserProfile, selections: WorkoutSelections) -> str:
        focus = fields.focus_value(selections)
        if status == "excellent":
            return (
                f"Excellent equipment optimization! Your {focus} selection makes optimal use "
                "of your available equipment."
            )
        if status == "good":
            return f"Good equipment optimization. Your {focus} selection generally works well with your equipment."
        if status == "warning":
            return (
                f"Moderate equipment optimization. Your {focus} selection may not optimally "
                "utilize your equipment."
            )
        return (
            f"Poor equipment optimization. Your {focus} selection may not work well "
            "with your available equipment."
        )
