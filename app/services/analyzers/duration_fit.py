"""
Duration fit: whether the selected duration suits the user's fitness level,
goals, workout type and the time they usually have.
"""
from app.models.selection import AnalysisContext, FactorStatus, UserProfile, WorkoutSelections
from app.services import selection_fields as fields
from app.services.analyzers.base import BASE_SCORE, FactorAnalyzer, SubScore


WEIGHT_LOSS_GOALS = ("weight", "fat", "slim", "lean")
STRENGTH_GOALS = ("strength", "muscle", "power", "build")
CARDIO_GOALS = ("cardio", "endurance", "stamina", "heart")
FLEXIBILITY_GOALS = ("flexibility", "mobility", "stretch", "yoga")

HIGH_INTENSITY_FOCUS = ("high intensity", "quick sweat", "burn")
STRENGTH_FOCUS = ("strength", "muscle", "power")
CARDIO_FOCUS = ("cardio", "endurance", "sweat", "burn")
FLEXIBILITY_FOCUS = ("flexibility", "mobility", "stretch", "yoga")

# A selection this much longer than the usual session is flagged
HISTORY_OVERRUN_RATIO = 1.5


class DurationFitAnalyzer(FactorAnalyzer):
    """Analyzes how well the selected duration fits the user's profile and goals."""

    name = "durationFit"
    weight = 0.2
    description = "Analyzes how well selected duration fits user profile and goals"
    impacts = {
        "excellent": "Your duration selection will maximize workout effectiveness and goal achievement.",
        "good": "Your duration selection will provide good results with minor optimizations possible.",
        "warning": "Your duration selection may limit workout effectiveness or goal progress.",
        "poor": "Your duration selection may significantly impact workout quality and goal achievement.",
    }

    def checks(self, profile: UserProfile, selections: WorkoutSelections, context: AnalysisContext):
        duration = fields.duration_bucket(selections)
        return [
            (self.fitness_level_match(profile, duration), 0.3),
            (self.goal_achievement(profile, duration), 0.25),
            (self.workout_type_optimization(selections, duration), 0.25),
            (self.time_availability(profile, selections, duration), 0.2),
        ]

    def fitness_level_match(self, profile: UserProfile, duration: str) -> SubScore:
        tier = fields.experience_level(profile)
        result = SubScore(BASE_SCORE)

        if tier == "beginner":
            if duration == "long":
                result.score -= 0.4
                result.details.append("Long duration may be overwhelming for someone new to exercise")
                result.suggestions.append('Consider "Short" or "Medium" duration for easier adaptation')
            elif duration == "short":
                result.score += 0.1
                result.details.append("Short duration is perfect for building exercise habits")
        elif tier == "intermediate":
            if duration == "long":
                result.score -= 0.1
                result.details.append("Long duration is manageable with some experience")
            elif duration == "short":
                result.score += 0.05
                result.details.append("Short duration works well for your experience level")
        elif tier == "advanced":
            if duration == "short":
                result.score -= 0.2
                result.details.append("Short duration may not provide sufficient training stimulus for advanced level")
                result.suggestions.append('Consider "Medium" or "Long" duration for better training effect')
            elif duration == "long":
                result.score += 0.1
                result.details.append("Long duration supports advanced training needs")

        return result

    def goal_achievement(self, profile: UserProfile, duration: str) -> SubScore:
        result = SubScore(BASE_SCORE)

        if not profile.goals:
            result.details.append("No specific goals set - duration selection is acceptable")
            return result

        for goal in profile.goals:
            goal_key = goal.lower()
            if fields.contains_any(goal_key, WEIGHT_LOSS_GOALS):
                if duration == "short":
                    result.score -= 0.2
                    result.details.append("Short duration may limit calorie burn for weight loss")
                    result.suggestions.append('Consider "Medium" or "Long" duration for better weight loss results')
                elif duration == "long":
                    result.score += 0.1
                    result.details.append("Long duration supports weight loss goals through increased calorie burn")
            elif fields.contains_any(goal_key, STRENGTH_GOALS):
                if duration == "short":
                    result.score -= 0.1
                    result.details.append("Short duration may limit strength training volume")
                elif duration == "long":
                    result.score += 0.05
                    result.details.append("Long duration allows for comprehensive strength training")
            elif fields.contains_any(goal_key, CARDIO_GOALS):
                if duration == "short":
                    result.score -= 0.3
                    result.details.append("Short duration may not provide sufficient cardio stimulus")
                    result.suggestions.append('Consider "Medium" or "Long" duration for better cardio development')
                elif duration == "long":
                    result.score += 0.2
                    result.details.append("Long duration is excellent for cardio development")
            elif fields.contains_any(goal_key, FLEXIBILITY_GOALS):
                if duration == "short":
                    result.score -= 0.1
                    result.details.append("Short duration may limit flexibility work")
                elif duration == "long":
                    result.score += 0.1
                    result.details.append("Long duration allows for comprehensive flexibility work")

        return result

    def workout_type_optimization(self, selections: WorkoutSelections, duration: str) -> SubScore:
        focus = fields.focus_key(selections)
        energy = fields.energy_level(selections)
        result = SubScore(BASE_SCORE)

        if fields.contains_any(focus, HIGH_INTENSITY_FOCUS):
            if duration == "long" and energy == "high":
                result.score -= 0.3
                result.details.append("Long duration with high energy may lead to overtraining")
                result.suggestions.append('Consider "Medium" duration for high-intensity workouts')
            elif duration == "short" and energy == "high":
                result.score += 0.1
                result.details.append("Short duration is perfect for high-intensity training")
        elif fields.contains_any(focus, STRENGTH_FOCUS):
            if duration == "short":
                result.score -= 0.2
                result.details.append("Short duration may limit strength training effectiveness")
                result.suggestions.append('Consider "Medium" or "Long" duration for strength training')
            elif duration == "long":
                result.score += 0.1
                result.details.append("Long duration supports comprehensive strength training")
        elif fields.contains_any(focus, CARDIO_FOCUS):
            if duration == "short":
                result.score -= 0.3
                result.details.append("Short duration may not provide sufficient cardio stimulus")
                result.suggestions.append('Consider "Medium" or "Long" duration for cardio training')
            elif duration == "long":
                result.score += 0.2
                result.details.append("Long duration is excellent for cardio development")
        elif fields.contains_any(focus, FLEXIBILITY_FOCUS):
            if duration == "short":
                result.score -= 0.1
                result.details.append("Short duration may limit flexibility work")
            elif duration == "long":
                result.score += 0.1
                result.details.append("Long duration allows for comprehensive flexibility work")

        return result

    def time_availability(self, profile: UserProfile, selections: WorkoutSelections, duration: str) -> SubScore:
        tier = fields.experience_level(profile)
        result = SubScore(BASE_SCORE)

        if tier == "beginner" and duration == "long":
            result.score -= 0.1
            result.details.append("Long duration may be challenging to maintain for beginners")
            result.suggestions.append('Consider "Medium" duration for better consistency')
        elif tier == "advanced" and duration == "short":
            result.score -= 0.1
            result.details.append("Short duration may not meet advanced training needs")
            result.suggestions.append('Consider "Medium" or "Long" duration for better results')

        usual = fields.average_duration(profile)
        minutes = fields.duration_minutes(selections)
        if usual and minutes and minutes > usual * HISTORY_OVERRUN_RATIO:
            result.score -= 0.1
            result.details.append(f"{minutes:g} minutes is well beyond your usual {usual:g} minute sessions")
            result.suggestions.append(f"Consider a duration closer to your usual {usual:g} minutes")

        return result

    def reasoning(self, status: FactorStatus, profile: UserProfile, selections: WorkoutSelections) -> str:
        duration = fields.duration_bucket(selections)
        if status == "excellent":
            level = profile.fitnessLevel or "beginner"
            focus = fields.focus_value(selections)
            return (
                f"Excellent duration fit! Your {duration} selection is perfectly suited "
                f"for your {level} level and {focus} focus."
            )
        if status == "good":
            return f"Good duration fit. Your {duration} selection generally works well for your profile and goals."
        if status == "warning":
            return f"Moderate duration fit. Your {duration} selection may need adjustment for optimal results."
        return (
            f"Poor duration fit. Your {duration} selection may not be appropriate "
            "for your current needs and goals."
        )
