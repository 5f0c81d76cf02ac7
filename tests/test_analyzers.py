"""
Tests for the five factor analyzers and their shared base class.
"""
import pytest

from app.models.selection import AnalysisContext, UserProfile, WorkoutSelections
from app.services.analyzers.base import FactorAnalyzer, SubScore, status_for
from app.services.analyzers.duration_fit import DurationFitAnalyzer
from app.services.analyzers.equipment_optimization import EquipmentOptimizationAnalyzer
from app.services.analyzers.goal_alignment import GoalAlignmentAnalyzer
from app.services.analyzers.intensity_match import IntensityMatchAnalyzer
from app.services.analyzers.recovery_respect import RecoveryRespectAnalyzer


class FixedAnalyzer(FactorAnalyzer):
    """Analyzer whose single sub-check returns a fixed raw score."""

    name = "fixed"
    weight = 1.0
    impacts = {status: f"{status} impact" for status in ("excellent", "good", "warning", "poor")}

    def __init__(self, raw_score):
        self.raw_score = raw_score

    def checks(self, profile, selections, context):
        return [(SubScore(self.raw_score, ["detail"]), 1.0)]

    def reasoning(self, status, profile, selections):
        return f"{status} reasoning"


class TestFactorAnalyzerBase:
    """Tests for status tiers and score bounds."""

    @pytest.mark.parametrize("score,status", [
        (1.0, "excellent"),
        (0.85, "excellent"),
        (0.8499, "good"),
        (0.70, "good"),
        (0.6999, "warning"),
        (0.50, "warning"),
        (0.4999, "poor"),
        (0.0, "poor"),
    ])
    def test_status_thresholds(self, score, status):
        assert status_for(score) == status

    @pytest.mark.parametrize("raw,expected", [(1.7, 1.0), (-0.4, 0.0), (0.6, 0.6)])
    def test_sub_scores_are_clamped(self, raw, expected, default_context):
        result = FixedAnalyzer(raw).analyze(UserProfile(), WorkoutSelections(), default_context)
        assert result.score == pytest.approx(expected)
        assert 0.0 <= result.score <= 1.0

    def test_empty_suggestions_become_none(self, default_context):
        result = FixedAnalyzer(0.9).analyze(UserProfile(), WorkoutSelections(), default_context)
        assert result.suggestions is None
        assert result.details == ("detail",)
        assert result.reasoning == "excellent reasoning"
        assert result.impact == "excellent impact"

    def test_weights_sum_to_one(self):
        analyzers = [
            GoalAlignmentAnalyzer(),
            IntensityMatchAnalyzer(),
            DurationFitAnalyzer(),
            RecoveryRespectAnalyzer(),
            EquipmentOptimizationAnalyzer(),
        ]
        assert sum(a.weight for a in analyzers) == pytest.approx(1.0)

        profile = UserProfile(fitnessLevel="beginner")
        selections = WorkoutSelections(focus="strength", energy=3, duration=30)
        for analyzer in analyzers:
            checks = analyzer.checks(profile, selections, AnalysisContext())
            assert sum(weight for _, weight in checks) == pytest.approx(1.0), analyzer.name


class TestGoalAlignment:
    """Tests for GoalAlignmentAnalyzer."""

    def test_no_goals(self, beginner_profile, long_strength_selections, default_context):
        result = GoalAlignmentAnalyzer().analyze(beginner_profile, long_strength_selections, default_context)

        # 0.4 * 0.5 + 0.3 * 0.8 + 0.3 * 0.8
        assert result.score == pytest.approx(0.68)
        assert result.status == "warning"
        assert "No specific fitness goals set in profile" in result.details
        assert "Set your primary fitness goals for better workout recommendations" in result.suggestions

    def test_matching_goal_and_high_energy(self, default_context):
        profile = UserProfile(fitnessLevel="beginner", goals=["build strength"])
        selections = WorkoutSelections(focus="strength training", energy=5)

        result = GoalAlignmentAnalyzer().analyze(profile, selections, default_context)

        # 0.4 * 1.0 + 0.3 * 0.8 + 0.3 * 0.9
        assert result.score == pytest.approx(0.91)
        assert result.status == "excellent"
        assert result.reasoning.startswith(
            "Excellent alignment! Your strength training focus and high energy selection"
        )

    def test_mismatched_goal_suggests_alternative(self, default_context):
        profile = UserProfile(fitnessLevel="intermediate", goals=["cardio endurance"])
        selections = WorkoutSelections(focus="yoga", energy=1)

        result = GoalAlignmentAnalyzer().analyze(profile, selections, default_context)

        assert "Consider Cardio for better goal alignment" in result.suggestions
        assert "Your selected workout focus may not align with your primary goals" in result.suggestions
        assert result.status == "poor"

    def test_advanced_focus_for_beginner(self, beginner_profile):
        sub = GoalAlignmentAnalyzer().focus_match(beginner_profile, WorkoutSelections(focus="Power"))
        assert sub.score == pytest.approx(0.5)
        assert sub.suggestions == ['Consider "General Fitness" or "Beginner Friendly" focus']

    def test_preferred_style_mismatch(self):
        profile = UserProfile(fitnessLevel="intermediate", preferences={"workoutStyle": ["Yoga"]})
        sub = GoalAlignmentAnalyzer().focus_match(profile, WorkoutSelections(focus="cardio"))
        assert sub.score == pytest.approx(0.7)
        assert "You typically prefer Yoga workouts, but selected cardio" in sub.details


class TestIntensityMatch:
    """Tests for IntensityMatchAnalyzer."""

    def test_low_energy_for_advanced(self, default_context):
        profile = UserProfile(fitnessLevel="advanced")
        selections = WorkoutSelections(energy=1)

        result = IntensityMatchAnalyzer().analyze(profile, selections, default_context)

        # 0.3 * 0.5 + 0.25 * 0.6 + 0.2 * 0.8 + 0.15 * 0.8 + 0.1 * 0.8
        assert result.score == pytest.approx(0.66)
        assert result.status == "warning"
        assert 'Consider "High Energy" or "Moderate" for better challenge' in result.suggestions

    def test_evening_high_energy_penalized(self):
        sub = IntensityMatchAnalyzer().time_of_day(AnalysisContext(timeOfDay="evening"), "high")
        assert sub.score == pytest.approx(0.6)
        assert sub.suggestions

    def test_recent_load_and_injuries(self):
        profile = UserProfile(basicLimitations={"injuries": ["knee pain"]})
        context = AnalysisContext(previousWorkouts=6)
        sub = IntensityMatchAnalyzer().recovery_consideration(profile, context, "high")
        assert sub.score == pytest.approx(0.3)
        assert len(sub.suggestions) == 2

    def test_preference_match(self):
        profile = UserProfile(preferences={"intensityPreference": "Moderate"})
        analyzer = IntensityMatchAnalyzer()
        assert analyzer.preference_alignment(profile, "moderate").score == pytest.approx(0.9)
        assert analyzer.preference_alignment(profile, "high").score == pytest.approx(0.7)


class TestDurationFit:
    """Tests for DurationFitAnalyzer."""

    def test_long_session_for_beginner(self, beginner_profile, long_strength_selections, default_context):
        result = DurationFitAnalyzer().analyze(beginner_profile, long_strength_selections, default_context)

        # 0.3 * 0.4 + 0.25 * 0.8 + 0.25 * 0.9 + 0.2 * 0.7
        assert result.score == pytest.approx(0.685)
        assert result.status == "warning"
        assert result.suggestions == (
            'Consider "Short" or "Medium" duration for easier adaptation',
            'Consider "Medium" duration for better consistency',
        )
        assert result.reasoning == "Moderate duration fit. Your long selection may need adjustment for optimal results."

    def test_short_cardio_for_cardio_goal(self, default_context):
        profile = UserProfile(fitnessLevel="intermediate", goals=["cardio"])
        selections = WorkoutSelections(focus="cardio", duration=15, energy=3)

        result = DurationFitAnalyzer().analyze(profile, selections, default_context)

        # 0.3 * 0.85 + 0.25 * 0.5 + 0.25 * 0.5 + 0.2 * 0.8
        assert result.score == pytest.approx(0.665)

    def test_history_overrun(self):
        profile = UserProfile(fitnessLevel="intermediate", workoutHistory={"averageDuration": 30})
        sub = DurationFitAnalyzer().time_availability(profile, WorkoutSelections(duration=50), "long")
        assert sub.score == pytest.approx(0.7)
        assert "Consider a duration closer to your usual 30 minutes" in sub.suggestions

    def test_history_within_range(self):
        profile = UserProfile(fitnessLevel="intermediate", workoutHistory={"averageDuration": 40})
        sub = DurationFitAnalyzer().time_availability(profile, WorkoutSelections(duration=50), "long")
        assert sub.score == pytest.approx(0.8)
        assert sub.suggestions == []


class TestRecoveryRespect:
    """Tests for RecoveryRespectAnalyzer."""

    def test_nothing_to_recover_from(self, beginner_profile, long_strength_selections, default_context):
        result = RecoveryRespectAnalyzer().analyze(beginner_profile, long_strength_selections, default_context)
        assert result.score == pytest.approx(1.0)
        assert result.status == "excellent"
        assert result.suggestions is None

    def test_joint_injury_with_high_energy(self):
        profile = UserProfile(basicLimitations={"injuries": ["Knee arthritis"]})
        sub = RecoveryRespectAnalyzer().injury_consideration(profile, "general", "high")
        assert sub.score == pytest.approx(0.7)
        assert "High-impact selection may aggravate Knee arthritis" in sub.details

    def test_high_frequency(self):
        analyzer = RecoveryRespectAnalyzer()
        selections = WorkoutSelections(duration=60, energy=5)
        sub = analyzer.recent_workout_recovery(
            UserProfile(), selections, AnalysisContext(previousWorkouts=3), "general", "high"
        )
        # -0.2 frequency, -0.1 high energy, -0.1 long duration
        assert sub.score == pytest.approx(0.6)

    def test_repeating_focus_at_high_energy(self):
        profile = UserProfile(workoutHistory={"preferredFocusAreas": ["Strength"]})
        sub = RecoveryRespectAnalyzer().recent_workout_recovery(
            profile, WorkoutSelections(focus="strength"), AnalysisContext(previousWorkouts=1), "strength", "high"
        )
        assert sub.score == pytest.approx(0.8)
        assert "Repeating high-intensity focus may lead to overtraining" in sub.details

    def test_poor_sleep_with_high_energy(self):
        sub = RecoveryRespectAnalyzer().recent_workout_recovery(
            UserProfile(), WorkoutSelections(sleep=1, energy=5), AnalysisContext(), "general", "high"
        )
        assert sub.score == pytest.approx(0.9)

    @pytest.mark.parametrize("age,expected", [(70, 0.7), (55, 0.8), (45, 1.0), (30, 1.0)])
    def test_age_bands_at_high_energy(self, age, expected):
        sub = RecoveryRespectAnalyzer().age_recovery_capacity(UserProfile(age=age), "general", "high")
        assert sub.score == pytest.approx(expected)

    def test_senior_complex_focus(self):
        sub = RecoveryRespectAnalyzer().age_recovery_capacity(UserProfile(age=68), "advanced skill", "low")
        assert sub.score == pytest.approx(0.8)
        assert "Complex movements may challenge balance and coordination" in sub.details

    def test_health_conditions(self):
        profile = UserProfile(basicLimitations={"injuries": ["asthma", "type 2 diabetes"]})
        sub = RecoveryRespectAnalyzer().health_condition_accommodation(profile, "cardio", "low")
        # respiratory with cardio focus -0.3, metabolic with low energy -0.1
        assert sub.score == pytest.approx(0.6)


class TestEquipmentOptimization:
    """Tests for EquipmentOptimizationAnalyzer."""

    def test_strength_without_equipment(self, default_context):
        profile = UserProfile(fitnessLevel="beginner")
        selections = WorkoutSelections(focus="strength")

        result = EquipmentOptimizationAnalyzer().analyze(profile, selections, default_context)

        # 0.4 * 0.5 + 0.3 * 0.8 + 0.2 * 0.9 + 0.1 * 0.8
        assert result.score == pytest.approx(0.70)
        assert 'Consider "Bodyweight" or "General Fitness" focus for equipment-free workouts' in result.suggestions

    def test_selected_equipment_counts(self, default_context):
        profile = UserProfile(fitnessLevel="advanced")
        selections = WorkoutSelections(
            focus="strength",
            equipment=["dumbbells", "barbell", "resistance bands", "kettlebell"],
        )

        result = EquipmentOptimizationAnalyzer().analyze(profile, selections, default_context)

        # 0.4 * 1.0 + 0.3 * 1.0 + 0.2 * 0.9 + 0.1 * 1.0
        assert result.score == pytest.approx(0.98)
        assert result.status == "excellent"

    def test_poor_match_suggests_alternative(self):
        sub = EquipmentOptimizationAnalyzer().availability_match(["yoga mat"], "Strength")
        assert sub.score == pytest.approx(0.5)
        assert sub.suggestions == ["Consider Flexibility for better equipment utilization"]

    def test_large_space_penalty(self):
        analyzer = EquipmentOptimizationAnalyzer()
        sub = analyzer.space_constraints(UserProfile(), AnalysisContext(), ["treadmill"], "cardio")
        assert sub.score == pytest.approx(0.5)

    def test_large_space_waived_at_gym(self):
        profile = UserProfile(basicLimitations={"availableLocations": ["Gym"]})
        sub = EquipmentOptimizationAnalyzer().space_constraints(profile, AnalysisContext(), [], "cardio")
        assert sub.score == pytest.approx(0.8)
        assert sub.suggestions == []

    def test_large_space_waived_outdoors(self):
        context = AnalysisContext(environmentalFactors={"location": "outdoor"})
        sub = EquipmentOptimizationAnalyzer().space_constraints(UserProfile(), context, [], "endurance")
        assert sub.score == pytest.approx(0.8)
