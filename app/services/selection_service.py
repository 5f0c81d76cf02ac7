"""
Service facade for selection analysis.

The facade is what routes talk to. It applies the activation gate, turns
every analysis failure into a null result, and exposes config and cache
management.
"""
import logging
from typing import Optional, Union

from app.core.config import settings
from app.core.errors import AnalysisError
from app.core.logger import log_error, logger
from app.models.selection import (
    AnalysisContext,
    EnvironmentalFactors,
    QuickAnalysis,
    SelectionAnalysis,
    SelectionAnalysisConfig,
    SelectionAnalysisConfigUpdate,
    UserProfile,
    WorkoutSelections,
)
from app.services import selection_fields as fields
from app.services.analyzers.base import status_for
from app.services.cache import TTLCache
from app.services.feature_flags import SELECTION_ANALYSIS_FLAG, ActivationGate, FeatureFlagService
from app.services.selection_analyzer import SelectionAnalyzer


QUICK_MESSAGES = {
    "excellent": "Excellent selections! Your workout will be highly personalized.",
    "good": "Good selections. Your workout will be well-suited to your needs.",
    "warning": "Moderate selections. Consider the suggestions for better results.",
    "poor": "Your selections may need adjustment for optimal results.",
}


def error_context(
    profile: Optional[UserProfile],
    selections: Optional[WorkoutSelections],
    context: Optional[AnalysisContext],
) -> dict:
    """Summary of a request for error logs; no free-text profile data."""
    summary = {}
    if profile is not None:
        summary["fitness_level"] = profile.fitnessLevel
        summary["goal_count"] = len(profile.goals)
    if selections is not None:
        summary["focus"] = fields.focus_value(selections)
        summary["energy"] = fields.energy_rating(selections)
        summary["duration"] = fields.duration_minutes(selections)
    if context is not None:
        summary["generation_type"] = context.generationType
        summary["user_experience"] = context.userExperience
        summary["previous_workouts"] = context.previousWorkouts
    return summary


class SelectionAnalysisService:
    """
    Entry point for selection analysis.

    Args:
        gate: Decides per profile whether analysis runs at all
        config: Initial engine config; ``reset()`` returns to it
        flags: Flag table behind the gate, kept for admin use
        cache: Snapshot cache shared with the orchestrator; emptied on ``reset()``
        log: Logger for facade and engine events
    """

    def __init__(
        self,
        gate: ActivationGate,
        config: Optional[SelectionAnalysisConfig] = None,
        flags: Optional[FeatureFlagService] = None,
        cache: Optional[TTLCache] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.gate = gate
        self.flags = flags
        self.cache = cache
        self.log = log or logger
        self._initial_config = config or SelectionAnalysisConfig()
        self.analyzer = self._build_analyzer()

    def _build_analyzer(self) -> SelectionAnalyzer:
        return SelectionAnalyzer(config=self._initial_config, cache=self.cache, log=self.log)

    async def analyze_selections(
        self,
        profile: Optional[UserProfile],
        selections: Optional[WorkoutSelections],
        context: Optional[AnalysisContext] = None,
    ) -> Optional[SelectionAnalysis]:
        """Full analysis, or None when disabled for this profile or on any failure."""
        if not self.gate.is_enabled(profile):
            self.log.info("Selection analysis disabled for this profile")
            return None

        try:
            return await self.analyzer.analyze_selections(profile, selections, context)
        except AnalysisError as e:
            log_error("analyze_selections", e, log=self.log, **error_context(profile, selections, context))
            return None
        except Exception as e:
            log_error(
                "analyze_selections (unexpected)",
                e,
                log=self.log,
                **error_context(profile, selections, context),
            )
            return None

    async def get_quick_analysis(
        self,
        profile: Optional[UserProfile],
        selections: Optional[WorkoutSelections],
        context: Optional[AnalysisContext] = None,
    ) -> Optional[QuickAnalysis]:
        """Four-tier summary of a full analysis, or None when it is unavailable."""
        analysis = await self.analyze_selections(profile, selections, context)
        if analysis is None:
            return None

        score = analysis.overallScore
        status = status_for(score)
        return QuickAnalysis(
            score=score,
            status=status,
            message=QUICK_MESSAGES[status],
            topSuggestion=analysis.suggestions[0].action if analysis.suggestions else None,
        )

    def get_config(self) -> SelectionAnalysisConfig:
        return self.analyzer.get_config()

    def update_config(
        self,
        updates: Union[SelectionAnalysisConfigUpdate, dict],
    ) -> SelectionAnalysisConfig:
        return self.analyzer.update_config(updates)

    def clear_cache(self) -> None:
        self.analyzer.clear_cache()

    def reset(self) -> None:
        """Replace the orchestrator with a fresh one (initial config, empty cache)."""
        if self.cache is not None:
            self.cache.clear()
        self.analyzer = self._build_analyzer()
        self.log.info("Selection analysis service reset")

    @staticmethod
    def create_context(
        generation_type: str = "detailed",
        user_experience: str = "beginner",
        previous_workouts: Optional[int] = None,
        time_of_day: Optional[str] = None,
        environmental_factors: Optional[dict] = None,
    ) -> AnalysisContext:
        """Build an analysis context; location defaults to indoor."""
        factors = {"location": "indoor", **(environmental_factors or {})}
        return AnalysisContext(
            generationType=generation_type,
            userExperience=user_experience,
            previousWorkouts=previous_workouts,
            timeOfDay=time_of_day,
            environmentalFactors=EnvironmentalFactors(**factors),
        )


def create_selection_service(
    cache: Optional[TTLCache] = None,
    log: Optional[logging.Logger] = None,
) -> SelectionAnalysisService:
    """Build the service from environment settings."""
    log = log or logger
    flags = FeatureFlagService.from_settings()
    config = SelectionAnalysisConfig(
        enableCaching=settings.SELECTION_CACHE_ENABLED,
        cacheTimeout=settings.SELECTION_CACHE_TTL_SECONDS,
        enableDetailedLogging=settings.SELECTION_DETAILED_LOGGING,
    )
    return SelectionAnalysisService(
        gate=ActivationGate(flags.predicate(SELECTION_ANALYSIS_FLAG), log=log),
        config=config,
        flags=flags,
        cache=cache,
        log=log,
    )
