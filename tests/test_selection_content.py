"""
Tests for insight, suggestion and educational content synthesis.
"""
import pytest

from app.models.selection import FactorAnalysis, FactorResults
from app.services import selection_content as content
from app.services.analyzers.base import status_for


def make_factor(score, suggestions=None, reasoning=None):
    return FactorAnalysis(
        score=score,
        status=status_for(score),
        reasoning=reasoning or f"reasoning {score}",
        impact="impact",
        details=(),
        suggestions=tuple(suggestions) if suggestions else None,
    )


def make_factors(**scores):
    """Five factors at 0.75 unless given."""
    values = {name: make_factor(0.75) for name in content.FACTOR_DISPLAY_NAMES}
    values.update(scores)
    return FactorResults(**values)


class TestInsights:
    """Tests for generate_insights."""

    @pytest.mark.parametrize("overall,insight_id,priority", [
        (0.85, "excellent-overall", 1),
        (0.70, "good-overall", 2),
        (0.50, "moderate-overall", 3),
        (0.49, "poor-overall", 4),
    ])
    def test_overall_insight_tiers(self, overall, insight_id, priority):
        insights = content.generate_insights(overall, make_factors())
        assert insights[0].id == insight_id
        assert insights[0].priority == priority
        assert insights[0].factor == "overall"

    def test_factor_insights_sorted_by_priority(self):
        factors = make_factors(
            goalAlignment=make_factor(0.5, reasoning="goals are off"),
            intensityMatch=make_factor(0.95, reasoning="intensity is spot on"),
        )

        insights = content.generate_insights(0.6, factors)

        assert [i.id for i in insights] == [
            "moderate-overall",
            "low-goalAlignment",
            "excellent-intensityMatch",
        ]
        low = insights[1]
        assert low.type == "suggestion"
        assert low.title == "Goal Alignment Needs Attention"
        assert low.message == "goals are off"
        assert low.actionable is True
        assert insights[2].title == "Excellent Intensity Match"
        assert insights[2].priority == 6

    def test_middle_scores_add_no_factor_insights(self):
        assert len(content.generate_insights(0.75, make_factors())) == 1


class TestSuggestions:
    """Tests for generate_suggestions."""

    def test_suggestions_are_classified_and_ordered(self):
        factors = make_factors(
            goalAlignment=make_factor(0.4, ["Consider Cardio", "Update your goals"]),
            equipmentOptimization=make_factor(0.8, ["Try a resistance band circuit"]),
            durationFit=make_factor(0.65, ["Complete a longer warm-up"]),
        )

        suggestions = content.generate_suggestions(factors)

        assert [s.priority for s in suggestions] == [11, 11, 23, 35]
        first, second, third, fourth = suggestions

        assert first.id == "suggestion-1"
        assert first.action == "Consider Cardio"
        assert first.description == "Improve Goal Alignment"
        assert first.impact == "high"
        assert first.estimatedScoreIncrease == 0.3
        assert first.quickFix is True
        assert first.timeRequired == "immediate"
        assert first.category == "goals"

        assert second.quickFix is False
        assert second.timeRequired == "5min"

        assert third.id == "suggestion-3"
        assert third.impact == "medium"
        assert third.timeRequired == "15min"
        assert third.category == "duration"

        assert fourth.id == "suggestion-4"
        assert fourth.impact == "low"
        assert fourth.estimatedScoreIncrease == 0.1
        assert fourth.quickFix is True
        assert fourth.timeRequired == "30min"

    def test_no_raw_suggestions(self):
        assert content.generate_suggestions(make_factors()) == []

    @pytest.mark.parametrize("score,factor,priority", [
        (0.2, "goalAlignment", 11),
        (0.6, "recoveryRespect", 24),
        (0.9, "equipmentOptimization", 35),
    ])
    def test_priority_formula(self, score, factor, priority):
        assert content.suggestion_priority(score, factor) == priority


class TestEducationalContent:
    """Tests for generate_educational_content."""

    def test_basics_always_first(self):
        items = content.generate_educational_content(make_factors())
        assert [i.id for i in items] == ["selection-basics"]
        assert items[0].category == "selection"
        assert items[0].priority == 1

    def test_low_factors_get_learning_entries(self):
        factors = make_factors(goalAlignment=make_factor(0.69), durationFit=make_factor(0.5))

        items = content.generate_educational_content(factors)

        assert [i.id for i in items] == ["selection-basics", "learn-goalAlignment", "learn-durationFit"]
        duration = items[2]
        assert duration.title == "Improving Duration Fit"
        assert duration.content == "Learn how to optimize your duration fit for better workout results."
        assert duration.category == "fitness"
        assert duration.priority == 2
        assert duration.learnMoreUrl == "/education/durationFit"
