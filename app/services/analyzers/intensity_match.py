"""
Intensity match: whether the selected energy suits the user's fitness level,
time of day, recent training load and stated intensity preference.
"""
from app.models.selection import AnalysisContext, FactorStatus, UserProfile, WorkoutSelections
from app.services import selection_fields as fields
from app.services.analyzers.base import BASE_SCORE, FactorAnalyzer, SubScore


# (energy) -> (adjustment, detail, suggestion) per fitness tier
FITNESS_RULES = {
    "beginner": {
        "high": (-0.4, "High energy selection may be too intense for someone new to exercise",
                 'Consider "Low Energy" or "Moderate" for a gentler introduction'),
        "low": (0.1, "Low energy selection is perfect for someone new to exercise", None),
    },
    "intermediate": {
        "high": (-0.1, "High energy may be challenging but manageable with some experience", None),
        "low": (0.05, "Low energy selection is appropriate for your experience level", None),
    },
    "advanced": {
        "low": (-0.3, "Low energy selection may not provide sufficient challenge for advanced level",
                'Consider "High Energy" or "Moderate" for better challenge'),
        "high": (0.1, "High energy selection is excellent for advanced fitness level", None),
    },
}

EXPERIENCE_RULES = {
    "beginner": {
        "high": (-0.3, "High energy selection may be overwhelming for beginners",
                 'Consider "Moderate" energy for better form and safety'),
        "low": (0.1, "Low energy selection allows focus on proper form and technique", None),
    },
    "intermediate": {
        "high": (0.05, "High energy selection is appropriate for intermediate experience", None),
        "low": (-0.1, "Low energy may not provide enough challenge for intermediate level", None),
    },
    "advanced": {
        "low": (-0.2, "Low energy selection may not meet advanced training needs",
                'Consider "High Energy" for more challenging workouts'),
        "high": (0.1, "High energy selection matches advanced training expectations", None),
    },
}

TIME_OF_DAY_RULES = {
    "morning": {
        "high": (0.1, "High energy selection is excellent for morning workouts", None),
        "low": (-0.1, "Low energy selection may not provide enough morning energy boost",
                'Consider "Moderate" or "High Energy" for better morning activation'),
    },
    "afternoon": {
        "high": (0.05, "High energy selection works well for afternoon workouts", None),
        "low": (-0.05, "Low energy selection is acceptable for afternoon but may be too gentle", None),
    },
    "evening": {
        "high": (-0.2, "High energy selection may interfere with evening recovery and sleep",
                 'Consider "Low Energy" or "Moderate" for better evening recovery'),
        "low": (0.1, "Low energy selection is perfect for evening workouts", None),
    },
}


def _apply_rule(result: SubScore, rules: dict, tier: str, energy: str) -> None:
    rule = rules.get(tier, {}).get(energy)
    if rule is None:
        return
    adjustment, detail, suggestion = rule
    result.score += adjustment
    result.details.append(detail)
    if suggestion:
        result.suggestions.append(suggestion)


class IntensityMatchAnalyzer(FactorAnalyzer):
    """Analyzes how well the selected intensity matches the user's profile and context."""

    name = "intensityMatch"
    weight = 0.25
    description = "Analyzes how well selected intensity matches user profile and context"
    impacts = {
        "excellent": "Your intensity selection will maximize workout effectiveness and enjoyment.",
        "good": "Your intensity selection will provide good results with minor adjustments possible.",
        "warning": "Your intensity selection may limit workout effectiveness or cause unnecessary strain.",
        "poor": "Your intensity selection may lead to poor performance or increased injury risk.",
    }

    def checks(self, profile: UserProfile, selections: WorkoutSelections, context: AnalysisContext):
        energy = fields.energy_level(selections)
        tier = fields.experience_level(profile)
        return [
            (self.fitness_level_alignment(profile, energy), 0.3),
            (self.experience_match(tier, energy), 0.25),
            (self.time_of_day(context, energy), 0.2),
            (self.recovery_consideration(profile, context, energy), 0.15),
            (self.preference_alignment(profile, energy), 0.1),
        ]

    def fitness_level_alignment(self, profile: UserProfile, energy: str) -> SubScore:
        result = SubScore(BASE_SCORE)
        _apply_rule(result, FITNESS_RULES, fields.experience_level(profile), energy)
        return result

    def experience_match(self, tier: str, energy: str) -> SubScore:
        result = SubScore(BASE_SCORE)
        _apply_rule(result, EXPERIENCE_RULES, tier, energy)
        return result

    def time_of_day(self, context: AnalysisContext, energy: str) -> SubScore:
        result = SubScore(BASE_SCORE)
        if context.timeOfDay:
            _apply_rule(result, TIME_OF_DAY_RULES, context.timeOfDay, energy)
        return result

    def recovery_consideration(self, profile: UserProfile, context: AnalysisContext, energy: str) -> SubScore:
        previous = context.previousWorkouts or 0
        result = SubScore(BASE_SCORE)

        if previous >= 5:
            if energy == "high":
                result.score -= 0.3
                result.details.append("High energy selection may not allow adequate recovery after recent workouts")
                result.suggestions.append('Consider "Low Energy" or "Moderate" for better recovery')
            elif energy == "low":
                result.score += 0.1
                result.details.append("Low energy selection supports recovery after recent workouts")
        elif previous >= 3 and energy == "high":
            result.score -= 0.1
            result.details.append("High energy selection is acceptable but monitor recovery needs")

        if fields.injuries(profile) and energy == "high":
            result.score -= 0.2
            result.details.append("High energy selection may aggravate existing injuries")
            result.suggestions.append('Consider "Low Energy" or "Moderate" for safer training with injuries')

        return result

    def preference_alignment(self, profile: UserProfile, energy: str) -> SubScore:
        preferred = profile.preferences.intensityPreference
        result = SubScore(BASE_SCORE)

        if not preferred:
            return result

        if preferred.lower() != energy:
            result.score -= 0.1
            result.details.append(f"You typically prefer {preferred} workouts, but selected {energy}")
            result.suggestions.append(f"Consider {preferred} energy for workouts you enjoy more")
        else:
            result.score += 0.1
            result.details.append(f"Your {energy} selection matches your preferred energy level")

        return result

    def reasoning(self, status: FactorStatus, profile: UserProfile, selections: WorkoutSelections) -> str:
        energy = fields.energy_level(selections)
        if status == "excellent":
            level = profile.fitnessLevel or "beginner"
            return (
                f"Excellent intensity match! Your {energy} energy selection is perfectly suited "
                f"for your {level} fitness level."
            )
        if status == "good":
            return f"Good intensity match. Your {energy} selection generally works well for your profile."
        if status == "warning":
            return f"Moderate intensity match. Your {energy} selection may need adjustment for optimal results."
        return (
            f"Poor intensity match. Your {energy} selection may not be appropriate "
            "for your current fitness level and needs."
        )
