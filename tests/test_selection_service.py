"""
Tests for the selection analysis service facade.
"""
import logging

import pytest
from unittest.mock import patch

from app.models.selection import AnalysisContext, SelectionAnalysis, SelectionAnalysisConfig
from app.services.cache import TTLCache
from app.services.feature_flags import SELECTION_ANALYSIS_FLAG, ActivationGate
from app.services.selection_service import (
    QUICK_MESSAGES,
    SelectionAnalysisService,
    create_selection_service,
    error_context,
)


def make_service(enabled=True, config=None):
    return SelectionAnalysisService(gate=ActivationGate(lambda profile: enabled), config=config)


class TestAnalyzeSelections:
    """Tests for SelectionAnalysisService.analyze_selections."""

    @pytest.mark.asyncio
    async def test_enabled_returns_analysis(self, sample_profile, sample_selections):
        result = await make_service().analyze_selections(sample_profile, sample_selections)
        assert isinstance(result, SelectionAnalysis)

    @pytest.mark.asyncio
    async def test_disabled_returns_none(self, sample_profile, sample_selections):
        service = make_service(enabled=False)
        assert await service.analyze_selections(sample_profile, sample_selections) is None
        assert service.get_config() == SelectionAnalysisConfig()

    @pytest.mark.asyncio
    async def test_failing_flag_check_returns_none(self, sample_profile, sample_selections):
        def broken(_):
            raise RuntimeError("flag store down")

        service = SelectionAnalysisService(gate=ActivationGate(broken))
        assert await service.analyze_selections(sample_profile, sample_selections) is None

    @pytest.mark.asyncio
    async def test_invalid_input_returns_none(self, sample_profile):
        assert await make_service().analyze_selections(sample_profile, None) is None

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_none(self, sample_profile, sample_selections):
        service = make_service()
        with patch.object(service.analyzer, "analyze_selections", side_effect=KeyError("boom")):
            assert await service.analyze_selections(sample_profile, sample_selections) is None


class TestQuickAnalysis:
    """Tests for SelectionAnalysisService.get_quick_analysis."""

    @pytest.mark.asyncio
    async def test_summary_matches_full_analysis(self, beginner_profile, long_strength_selections):
        service = make_service()
        analysis = await service.analyze_selections(beginner_profile, long_strength_selections)
        summary = await service.get_quick_analysis(beginner_profile, long_strength_selections)

        assert summary.score == analysis.overallScore
        assert summary.message == QUICK_MESSAGES[summary.status]
        assert summary.topSuggestion == analysis.suggestions[0].action

    @pytest.mark.asyncio
    async def test_summary_none_when_disabled(self, sample_profile, sample_selections):
        service = make_service(enabled=False)
        assert await service.get_quick_analysis(sample_profile, sample_selections) is None

    def test_messages_cover_every_status(self):
        assert set(QUICK_MESSAGES) == {"excellent", "good", "warning", "poor"}
        assert QUICK_MESSAGES["excellent"] == "Excellent selections! Your workout will be highly personalized."


class TestConfigAndLifecycle:
    """Tests for config, cache and reset."""

    def test_update_config_is_visible(self):
        service = make_service()
        service.update_config({"enableDetailedLogging": True})
        assert service.get_config().enableDetailedLogging is True

    @pytest.mark.asyncio
    async def test_clear_cache(self, sample_profile, sample_selections):
        service = make_service()
        await service.analyze_selections(sample_profile, sample_selections)
        service.clear_cache()
        assert len(service.analyzer.cache) == 0

    @pytest.mark.asyncio
    async def test_reset_restores_initial_state(self, sample_profile, sample_selections):
        initial = SelectionAnalysisConfig(cacheTimeout=120)
        service = make_service(config=initial)
        await service.analyze_selections(sample_profile, sample_selections)
        service.update_config({"cacheTimeout": 10})

        service.reset()

        assert service.get_config() == initial
        assert len(service.analyzer.cache) == 0


class TestCreateContext:
    """Tests for the context helper."""

    def test_defaults(self):
        context = SelectionAnalysisService.create_context()
        assert context.generationType == "detailed"
        assert context.userExperience == "beginner"
        assert context.environmentalFactors.location == "indoor"
        assert context.previousWorkouts is None

    def test_overrides(self):
        context = SelectionAnalysisService.create_context(
            generation_type="quick",
            previous_workouts=4,
            time_of_day="evening",
            environmental_factors={"location": "outdoor", "weather": "sunny"},
        )
        assert context.generationType == "quick"
        assert context.previousWorkouts == 4
        assert context.timeOfDay == "evening"
        assert context.environmentalFactors.location == "outdoor"
        assert context.environmentalFactors.weather == "sunny"


class TestFactory:
    """Tests for create_selection_service."""

    @pytest.mark.asyncio
    async def test_factory_builds_working_service(self, sample_profile, sample_selections):
        service = create_selection_service()
        assert service.flags.get_flag(SELECTION_ANALYSIS_FLAG) is not None
        assert isinstance(await service.analyze_selections(sample_profile, sample_selections), SelectionAnalysis)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestInjectedDependencies:
    """Tests for the cache and logger passed into the facade."""

    @pytest.mark.asyncio
    async def test_injected_cache_and_logger_reach_the_orchestrator(self, sample_profile, sample_selections):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        log = logging.getLogger("tests.selection.injected")
        service = SelectionAnalysisService(
            gate=ActivationGate(lambda profile: True),
            config=SelectionAnalysisConfig(cacheTimeout=60),
            cache=cache,
            log=log,
        )

        assert service.analyzer.cache is cache
        assert service.analyzer.log is log

        first = await service.analyze_selections(sample_profile, sample_selections)
        assert len(cache) == 1
        assert await service.analyze_selections(sample_profile, sample_selections) is first

        clock.now += 61
        assert await service.analyze_selections(sample_profile, sample_selections) is not first

    @pytest.mark.asyncio
    async def test_reset_empties_and_keeps_injected_cache(self, sample_profile, sample_selections):
        cache = TTLCache()
        service = SelectionAnalysisService(gate=ActivationGate(lambda profile: True), cache=cache)
        await service.analyze_selections(sample_profile, sample_selections)

        service.reset()

        assert service.analyzer.cache is cache
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_failures_logged_with_request_summary(self, sample_profile, sample_selections, caplog):
        log = logging.getLogger("tests.selection.errors")
        service = SelectionAnalysisService(gate=ActivationGate(lambda profile: True), log=log)

        with patch.object(service.analyzer, "analyze_selections", side_effect=KeyError("boom")):
            with caplog.at_level(logging.ERROR, logger="tests.selection.errors"):
                assert await service.analyze_selections(sample_profile, sample_selections) is None

        messages = [r.getMessage() for r in caplog.records if r.name == "tests.selection.errors"]
        assert len(messages) == 1
        assert "analyze_selections (unexpected)" in messages[0]
        assert "fitness_level=some experience" in messages[0]
        assert "goal_count=2" in messages[0]
        assert "focus=strength training" in messages[0]
        assert "duration=45.0" in messages[0]

    def test_gate_warnings_use_injected_logger(self, sample_profile, caplog):
        def broken(_):
            raise RuntimeError("flag store down")

        log = logging.getLogger("tests.selection.gate")
        gate = ActivationGate(broken, log=log)

        with caplog.at_level(logging.WARNING, logger="tests.selection.gate"):
            assert gate.is_enabled(sample_profile) is False

        assert any(r.name == "tests.selection.gate" for r in caplog.records)

    def test_factory_forwards_dependencies(self):
        cache = TTLCache()
        log = logging.getLogger("tests.selection.factory")
        service = create_selection_service(cache=cache, log=log)
        assert service.analyzer.cache is cache
        assert service.log is log
        assert service.gate.log is log


class TestErrorContext:
    """Tests for the request summary attached to error logs."""

    def test_summary_fields(self, sample_profile, sample_selections):
        context = AnalysisContext(previousWorkouts=2)
        summary = error_context(sample_profile, sample_selections, context)
        assert summary == {
            "fitness_level": "some experience",
            "goal_count": 2,
            "focus": "strength training",
            "energy": 6,
            "duration": 45.0,
            "generation_type": "detailed",
            "user_experience": "beginner",
            "previous_workouts": 2,
        }

    def test_missing_inputs(self):
        assert error_context(None, None, None) == {}
