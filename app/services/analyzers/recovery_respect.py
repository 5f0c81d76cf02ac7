"""
Recovery respect: whether the selections leave room for recovery given
injuries, recent training load, sleep, age and health conditions.

Every sub-check starts from a perfect score and only subtracts.
"""
from app.models.selection import AnalysisContext, FactorStatus, UserProfile, WorkoutSelections
from app.services import selection_fields as fields
from app.services.analyzers.base import PERFECT_SCORE, FactorAnalyzer, SubScore


JOINT_ISSUES = ("knee", "shoulder", "hip", "ankle", "joint", "arthritis")
BACK_ISSUES = ("back", "spine", "disc", "hernia")
CARDIOVASCULAR_ISSUES = ("heart", "cardio", "blood pressure", "circulation")
MOBILITY_ISSUES = ("mobility", "flexibility", "range of motion", "stiffness")
RESPIRATORY_CONDITIONS = ("asthma", "breathing", "lung", "respiratory")
METABOLIC_CONDITIONS = ("diabetes", "metabolic", "insulin", "blood sugar")
NEUROLOGICAL_CONDITIONS = ("balance", "coordination", "neurological", "cognitive")

HIGH_IMPACT_FOCUS = ("high intensity", "quick sweat", "jump", "plyometric")
STRENGTH_FOCUS = ("strength", "muscle", "power")
CARDIO_FOCUS = ("cardio", "endurance", "sweat")
COMPLEX_FOCUS = ("advanced", "complex", "skill")

POOR_SLEEP_MAX = 2


class RecoveryRespectAnalyzer(FactorAnalyzer):
    """Analyzes how well selections respect recovery needs and limitations."""

    name = "recoveryRespect"
    weight = 0.15
    description = "Analyzes how well selections respect user recovery needs and limitations"
    impacts = {
        "excellent": "Your selections will support optimal recovery and long-term health.",
        "good": "Your selections will generally support recovery with minor adjustments possible.",
        "warning": "Your selections may compromise recovery and increase injury risk.",
        "poor": "Your selections may significantly impact recovery and increase injury risk.",
    }

    def checks(self, profile: UserProfile, selections: WorkoutSelections, context: AnalysisContext):
        focus = fields.focus_key(selections)
        energy = fields.energy_level(selections)
        return [
            (self.injury_consideration(profile, focus, energy), 0.35),
            (self.recent_workout_recovery(profile, selections, context, focus, energy), 0.3),
            (self.age_recovery_capacity(profile, focus, energy), 0.2),
            (self.health_condition_accommodation(profile, focus, energy), 0.15),
        ]

    def injury_consideration(self, profile: UserProfile, focus: str, energy: str) -> SubScore:
        conditions = fields.injuries(profile)
        result = SubScore(PERFECT_SCORE)

        if not conditions:
            result.details.append("No injuries reported - selections are appropriate")
            return result

        for condition in conditions:
            key = condition.lower()
            if fields.contains_any(key, JOINT_ISSUES):
                if fields.contains_any(focus, HIGH_IMPACT_FOCUS) or energy == "high":
                    result.score -= 0.3
                    result.details.append(f"High-impact selection may aggravate {condition}")
                    result.suggestions.append('Consider "Low Impact" or "Moderate" energy for joint safety')
            if fields.contains_any(key, BACK_ISSUES):
                if fields.contains_any(focus, STRENGTH_FOCUS):
                    result.score -= 0.2
                    result.details.append(f"Strength focus may strain {condition}")
                    result.suggestions.append('Consider "General Fitness" or "Flexibility" focus for back safety')
            if fields.contains_any(key, CARDIOVASCULAR_ISSUES):
                if fields.contains_any(focus, CARDIO_FOCUS) or energy == "high":
                    result.score -= 0.4
                    result.details.append(f"High-intensity cardio may stress {condition}")
                    result.suggestions.append('Consider "Low Energy" or "General Fitness" for cardiovascular safety')
            if fields.contains_any(key, MOBILITY_ISSUES):
                if fields.contains_any(focus, COMPLEX_FOCUS):
                    result.score -= 0.2
                    result.details.append(f"Complex movements may challenge {condition}")
                    result.suggestions.append('Consider "Beginner Friendly" or "General Fitness" for better mobility')

        return result

    def recent_workout_recovery(
        self,
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
        focus: str,
        energy: str,
    ) -> SubScore:
        previous = context.previousWorkouts or 0
        duration = fields.duration_bucket(selections)
        result = SubScore(PERFECT_SCORE)

        if previous >= 5:
            result.score -= 0.4
            result.details.append("Very high workout frequency detected - recovery may be compromised")
            result.suggestions.append('Consider "Low Energy" or "Recovery" focus for better adaptation')
        elif previous >= 3:
            result.score -= 0.2
            result.details.append("High workout frequency - monitor recovery needs")
            if energy == "high":
                result.score -= 0.1
                result.suggestions.append('Consider "Moderate" energy to support recovery')
        elif previous == 0:
            result.details.append("No recent workouts - recovery is not a concern")

        if previous > 0 and energy == "high" and self.is_repeating_focus(focus, profile):
            result.score -= 0.2
            result.details.append("Repeating high-intensity focus may lead to overtraining")
            result.suggestions.append('Consider different focus or "Moderate" energy for variety')

        if previous >= 3 and duration == "long":
            result.score -= 0.1
            result.details.append("Long duration with frequent workouts may limit recovery")
            result.suggestions.append('Consider "Medium" or "Short" duration for better recovery')

        sleep = fields.sleep_rating(selections)
        if sleep is not None and sleep <= POOR_SLEEP_MAX and energy == "high":
            result.score -= 0.1
            result.details.append("High energy after poor sleep may slow recovery")
            result.suggestions.append('Consider "Moderate" energy after a poor night of sleep')

        return result

    def age_recovery_capacity(self, profile: UserProfile, focus: str, energy: str) -> SubScore:
        age = profile.age
        result = SubScore(PERFECT_SCORE)

        if not age:
            result.details.append("Age not specified - assuming appropriate recovery capacity")
            return result

        if age >= 65:
            if energy == "high":
                result.score -= 0.3
                result.details.append("High energy selection may be too intense for your age")
                result.suggestions.append('Consider "Low Energy" or "Moderate" for safer training')
            if fields.contains_any(focus, COMPLEX_FOCUS):
                result.score -= 0.2
                result.details.append("Complex movements may challenge balance and coordination")
                result.suggestions.append('Consider "Beginner Friendly" or "General Fitness" for safety')
        elif age >= 50:
            if energy == "high":
                result.score -= 0.2
                result.details.append("High energy selection may require longer recovery at your age")
                result.suggestions.append('Consider "Moderate" energy for better recovery')
            if fields.contains_any(focus, HIGH_IMPACT_FOCUS):
                result.score -= 0.1
                result.details.append("High-impact focus may stress joints more at your age")
                result.suggestions.append('Consider "Low Impact" or "General Fitness" for joint health')
        elif age >= 40:
            if energy == "high" and fields.contains_any(focus, HIGH_IMPACT_FOCUS):
                result.score -= 0.1
                result.details.append("High-intensity high-impact may require more recovery")

        return result

    def health_condition_accommodation(self, profile: UserProfile, focus: str, energy: str) -> SubScore:
        conditions = fields.injuries(profile)
        result = SubScore(PERFECT_SCORE)

        if not conditions:
            result.details.append("No health conditions reported - selections are appropriate")
            return result

        for condition in conditions:
            key = condition.lower()
            if fields.contains_any(key, RESPIRATORY_CONDITIONS):
                if energy == "high" or fields.contains_any(focus, CARDIO_FOCUS):
                    result.score -= 0.3
                    result.details.append(f"High-intensity selection may stress {condition}")
                    result.suggestions.append('Consider "Low Energy" or "Moderate" for respiratory safety')
            if fields.contains_any(key, METABOLIC_CONDITIONS):
                if energy == "low":
                    result.score -= 0.1
                    result.details.append(f"Low energy may not provide sufficient metabolic stimulus for {condition}")
                    result.suggestions.append('Consider "Moderate" energy for better metabolic health')
            if fields.contains_any(key, NEUROLOGICAL_CONDITIONS):
                if fields.contains_any(focus, COMPLEX_FOCUS):
                    result.score -= 0.2
                    result.details.append(f"Complex movements may challenge {condition}")
                    result.suggestions.append('Consider "Simple" or "General Fitness" focus for safety')

        return result

    @staticmethod
    def is_repeating_focus(focus: str, profile: UserProfile) -> bool:
        """True when the selected focus is one the user already trains most."""
        return any(area.strip().lower() == focus for area in fields.preferred_focus_areas(profile))

    def reasoning(self, status: FactorStatus, profile: UserProfile, selections: WorkoutSelections) -> str:
        if status == "excellent":
            energy = fields.energy_level(selections)
            return (
                f"Excellent recovery consideration! Your {energy} selection respects "
                "your recovery needs and limitations."
            )
        if status == "good":
            return "Good recovery consideration. Your selections generally respect your recovery needs."
        if status == "warning":
            return "Moderate recovery consideration. Some selections may not optimally respect your recovery needs."
        return (
            "Poor recovery consideration. Your selections may not adequately respect your recovery needs "
            "and could lead to overtraining or injury."
        )
