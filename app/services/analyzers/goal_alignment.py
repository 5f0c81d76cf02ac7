"""
Goal alignment: how well the selected focus and energy serve the user's goals.

Sub-checks: goal type vs focus (40%), focus vs experience and preferred
style (30%), intensity vs goal type (30%).
"""
from app.models.selection import AnalysisContext, FactorStatus, UserProfile, WorkoutSelections
from app.services import selection_fields as fields
from app.services.analyzers.base import BASE_SCORE, FactorAnalyzer, SubScore


STRENGTH_GOALS = ("strength", "muscle", "power", "build")
CARDIO_GOALS = ("cardio", "endurance", "stamina", "heart")
WEIGHT_LOSS_GOALS = ("weight", "fat", "slim", "lean")
FLEXIBILITY_GOALS = ("flexibility", "mobility", "stretch", "yoga")

STRENGTH_FOCUS = ("strength", "muscle", "power")
CARDIO_FOCUS = ("cardio", "endurance", "sweat", "burn")
WEIGHT_LOSS_FOCUS = ("weight", "burn", "sweat", "fat")
FLEXIBILITY_FOCUS = ("flexibility", "mobility", "stretch", "yoga")
ADVANCED_FOCUS = ("advanced", "intense", "power")
BEGINNER_FOCUS = ("beginner", "easy", "gentle")


def _alternative_focus(goal: str) -> str:
    if fields.contains_any(goal, STRENGTH_GOALS):
        return "Strength Training"
    if fields.contains_any(goal, CARDIO_GOALS):
        return "Cardio"
    if fields.contains_any(goal, WEIGHT_LOSS_GOALS):
        return "Quick Sweat"
    if fields.contains_any(goal, FLEXIBILITY_GOALS):
        return "Flexibility"
    return "General Fitness"


class GoalAlignmentAnalyzer(FactorAnalyzer):
    """Analyzes how well workout selections align with the user's fitness goals."""

    name = "goalAlignment"
    weight = 0.25
    description = "Analyzes how well workout selections align with user fitness goals"
    impacts = {
        "excellent": "Your selections will maximize progress toward your fitness goals.",
        "good": "Your selections will provide good progress, with some room for optimization.",
        "warning": "Your selections may slow progress toward your goals. Consider adjustments.",
        "poor": "Your selections may significantly limit progress toward your goals.",
    }

    def checks(self, profile: UserProfile, selections: WorkoutSelections, context: AnalysisContext):
        return [
            (self.goal_type_alignment(profile, selections), 0.4),
            (self.focus_match(profile, selections), 0.3),
            (self.intensity_goal_alignment(profile, selections), 0.3),
        ]

    def goal_type_alignment(self, profile: UserProfile, selections: WorkoutSelections) -> SubScore:
        goals = profile.goals
        focus = fields.focus_value(selections)
        focus_key = focus.lower()

        if not goals:
            return SubScore(
                0.5,
                ["No specific fitness goals set in profile"],
                ["Set your primary fitness goals for better workout recommendations"],
            )

        result = SubScore(0.0)
        matched = 0
        for goal in goals:
            goal_key = goal.lower()
            if fields.contains_any(goal_key, STRENGTH_GOALS) and fields.contains_any(focus_key, STRENGTH_FOCUS):
                matched += 1
                result.details.append(f'Strength goal "{goal}" aligns with {focus} focus')
            elif fields.contains_any(goal_key, CARDIO_GOALS) and fields.contains_any(focus_key, CARDIO_FOCUS):
                matched += 1
                result.details.append(f'Cardio goal "{goal}" aligns with {focus} focus')
            elif fields.contains_any(goal_key, WEIGHT_LOSS_GOALS) and fields.contains_any(focus_key, WEIGHT_LOSS_FOCUS):
                matched += 1
                result.details.append(f"Weight loss goal aligns with {focus} focus")
            elif fields.contains_any(goal_key, FLEXIBILITY_GOALS) and fields.contains_any(focus_key, FLEXIBILITY_FOCUS):
                matched += 1
                result.details.append(f"Flexibility goal aligns with {focus} focus")
            else:
                result.details.append(f'Goal "{goal}" may not be optimally served by {focus} focus')
                result.suggestions.append(f"Consider {_alternative_focus(goal_key)} for better goal alignment")

        if matched == 0:
            result.suggestions.append("Your selected workout focus may not align with your primary goals")

        result.score = matched / len(goals)
        return result

    def focus_match(self, profile: UserProfile, selections: WorkoutSelections) -> SubScore:
        focus = fields.focus_value(selections)
        focus_key = focus.lower()
        experience = fields.experience_level(profile)
        result = SubScore(BASE_SCORE)

        if experience == "beginner" and fields.contains_any(focus_key, ADVANCED_FOCUS):
            result.score -= 0.3
            result.details.append(f"{focus} focus may be too advanced for beginner level")
            result.suggestions.append('Consider "General Fitness" or "Beginner Friendly" focus')
        elif experience == "advanced" and fields.contains_any(focus_key, BEGINNER_FOCUS):
            result.score -= 0.2
            result.details.append(f"{focus} focus may not provide enough challenge for advanced level")
            result.suggestions.append('Consider "Strength" or "High Intensity" focus for more challenge')
        else:
            result.details.append(f"{focus} focus is appropriate for your {experience} experience level")

        styles = profile.preferences.workoutStyle
        if styles and styles[0].lower() != focus_key:
            result.score -= 0.1
            result.details.append(f"You typically prefer {styles[0]} workouts, but selected {focus}")

        return result

    def intensity_goal_alignment(self, profile: UserProfile, selections: WorkoutSelections) -> SubScore:
        energy = fields.energy_level(selections)
        result = SubScore(BASE_SCORE)

        for goal in profile.goals:
            goal_key = goal.lower()
            if fields.contains_any(goal_key, WEIGHT_LOSS_GOALS):
                if energy == "low":
                    result.score -= 0.2
                    result.details.append("Low energy selection may limit calorie burn for weight loss")
                    result.suggestions.append('Consider "High Energy" for more effective weight loss')
                elif energy == "high":
                    result.score += 0.1
                    result.details.append("High energy selection is excellent for weight loss goals")
            elif fields.contains_any(goal_key, STRENGTH_GOALS):
                if energy == "low":
                    result.score -= 0.1
                    result.details.append("Low energy may limit strength gains")
                elif energy == "high":
                    result.score += 0.1
                    result.details.append("High energy selection supports strength building")
            elif fields.contains_any(goal_key, CARDIO_GOALS):
                if energy == "low":
                    result.score -= 0.3
                    result.details.append("Low energy selection may not provide sufficient cardio challenge")
                    result.suggestions.append('Consider "Moderate" or "High Energy" for better cardio results')
                elif energy == "high":
                    result.score += 0.2
                    result.details.append("High energy selection is perfect for cardio goals")

        return result

    def reasoning(self, status: FactorStatus, profile: UserProfile, selections: WorkoutSelections) -> str:
        if status == "excellent":
            focus = fields.focus_value(selections)
            energy = fields.energy_level(selections)
            return (
                f"Excellent alignment! Your {focus} focus and {energy} energy selection "
                "perfectly support your fitness goals."
            )
        if status == "good":
            return "Good alignment. Your selections generally support your goals, with room for minor optimizations."
        if status == "warning":
            return (
                "Moderate alignment. Some selections may not optimally support your goals. "
                "Consider the suggestions below."
            )
        return (
            "Poor alignment. Your current selections may not effectively support your fitness goals. "
            "Review the suggestions for better results."
        )
