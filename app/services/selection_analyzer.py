"""
Selection analysis orchestrator.

Validates inputs, consults the result cache, runs the five factor analyzers
concurrently, combines their scores with the configured weights and
synthesizes insights, suggestions and educational content.
"""
import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Union

from app.core.config import settings
from app.core.errors import AnalysisError
from app.core.logger import log_analysis, log_error, logger
from app.models.selection import (
    AnalysisContext,
    AnalysisMetadata,
    FactorAnalysis,
    FactorResults,
    SelectionAnalysis,
    SelectionAnalysisConfig,
    SelectionAnalysisConfigUpdate,
    UserProfile,
    ValidationResult,
    WorkoutSelections,
)
from app.services import selection_content as content
from app.services.analyzers.base import FactorAnalyzer, clamp
from app.services.analyzers.duration_fit import DurationFitAnalyzer
from app.services.analyzers.equipment_optimization import EquipmentOptimizationAnalyzer
from app.services.analyzers.goal_alignment import GoalAlignmentAnalyzer
from app.services.analyzers.intensity_match import IntensityMatchAnalyzer
from app.services.analyzers.recovery_respect import RecoveryRespectAnalyzer
from app.services.cache import TTLCache, analysis_cache_key


COMPONENT = "SelectionAnalyzer"

DEFAULT_FACTOR_RESULT = FactorAnalysis(
    score=0.5,
    status="warning",
    reasoning="Analysis failed — using default score",
    impact="Unable to determine impact",
    details=("Analysis encountered an error",),
)


def create_analyzers() -> list[FactorAnalyzer]:
    """The closed analyzer set, in factor order."""
    return [
        GoalAlignmentAnalyzer(),
        IntensityMatchAnalyzer(),
        DurationFitAnalyzer(),
        RecoveryRespectAnalyzer(),
        EquipmentOptimizationAnalyzer(),
    ]


def validate_inputs(
    profile: Optional[UserProfile],
    selections: Optional[WorkoutSelections],
    context: Optional[AnalysisContext] = None,
) -> ValidationResult:
    """
    Check input completeness. Never raises.

    Missing profile or selections are hard errors (data quality 0). Missing
    optional fields lower the data quality score and add a warning.
    """
    errors = []
    warnings = []
    quality = 1.0

    if profile is not None:
        if not profile.fitnessLevel:
            warnings.append("Fitness level not specified")
            quality -= 0.1
        if not profile.goals:
            warnings.append("No fitness goals specified")
            quality -= 0.2

    if selections is not None:
        if not selections.focus:
            warnings.append("Workout focus not specified")
            quality -= 0.1
        if selections.energy is None:
            warnings.append("Energy level not specified")
            quality -= 0.1
        if selections.duration is None:
            warnings.append("Duration not specified")
            quality -= 0.1

    if profile is None:
        errors.append("User profile is required")
        quality = 0.0
    if selections is None:
        errors.append("Workout selections are required")
        quality = 0.0

    return ValidationResult(
        isValid=not errors,
        errors=errors,
        warnings=warnings,
        dataQuality=round(max(0.0, quality), 4),
    )


class SelectionAnalyzer:
    """
    Runs one selection analysis per call and caches the resulting snapshots.

    Analyzers are pure and synchronous; they run on the default thread pool
    so the five factors are computed concurrently.

    Args:
        config: Engine config (weights, caching, logging detail)
        analyzers: Factor analyzers in factor order; defaults to the full set
        cache: Snapshot cache; its TTL follows ``config.cacheTimeout``
        log: Logger for engine events; defaults to the service logger
    """

    def __init__(
        self,
        config: Optional[SelectionAnalysisConfig] = None,
        analyzers: Optional[list[FactorAnalyzer]] = None,
        cache: Optional[TTLCache] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.config = config or SelectionAnalysisConfig()
        self.analyzers = analyzers if analyzers is not None else create_analyzers()
        self.cache = cache if cache is not None else TTLCache()
        self.cache.ttl = self.config.cacheTimeout
        self.log = log or logger

    async def analyze_selections(
        self,
        profile: Optional[UserProfile],
        selections: Optional[WorkoutSelections],
        context: Optional[AnalysisContext] = None,
    ) -> SelectionAnalysis:
        """
        Analyze one set of workout selections.

        Raises:
            AnalysisError: inputs are invalid or the analysis failed unexpectedly
        """
        context = context or AnalysisContext()
        started = time.perf_counter()

        validation = validate_inputs(profile, selections, context)
        if not validation.isValid:
            log_analysis(
                COMPONENT,
                "input validation failed",
                level=logging.INFO,
                log=self.log,
                errors=validation.errors,
            )
            raise AnalysisError(
                f"Invalid input data: {', '.join(validation.errors)}",
                cause=validation.errors,
            )

        log_analysis(
            COMPONENT,
            "input validation passed",
            log=self.log,
            data_quality=validation.dataQuality,
            warnings=len(validation.warnings),
        )

        try:
            cache_key = None
            if self.config.enableCaching:
                cache_key = analysis_cache_key(profile, selections, context)
                cached = self.cache.get(cache_key)
                if cached is not None:
                    log_analysis(COMPONENT, "returning cached analysis", log=self.log, cache_key=cache_key[:12])
                    return cached

            factors = await self._run_analyzers(profile, selections, context)
            overall_score = self.weighted_score(factors)
            library = content.ContentContext.from_factors(profile, selections, factors, overall_score, context)

            analysis = SelectionAnalysis(
                overallScore=overall_score,
                factors=factors,
                insights=tuple(content.generate_insights(overall_score, factors, library)),
                suggestions=tuple(content.generate_suggestions(factors, library)),
                educationalContent=tuple(content.generate_educational_content(factors, library)),
                metadata=AnalysisMetadata(
                    analysisTime=(time.perf_counter() - started) * 1000,
                    factorWeights=self.config.weights,
                    dataQuality=validation.dataQuality,
                    version=settings.ANALYSIS_VERSION,
                    timestamp=datetime.now(timezone.utc),
                ),
            )
        except Exception as e:
            log_error("selection analysis", e, log=self.log)
            raise AnalysisError(f"Selection analysis failed: {e}", cause=e) from e

        if cache_key is not None:
            self.cache.set(cache_key, analysis)

        log_analysis(
            COMPONENT,
            "analysis completed",
            log=self.log,
            overall_score=round(overall_score, 3),
            duration_ms=round(analysis.metadata.analysisTime, 1),
        )
        return analysis

    async def _run_analyzers(
        self,
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
    ) -> FactorResults:
        loop = asyncio.get_running_loop()
        results = await asyncio.gather(
            *(
                loop.run_in_executor(None, analyzer.analyze, profile, selections, context)
                for analyzer in self.analyzers
            ),
            return_exceptions=True,
        )

        factors = {}
        for analyzer, result in zip(self.analyzers, results):
            if isinstance(result, Exception):
                self.log.warning(f"{COMPONENT}: analyzer {analyzer.name} failed, using default score: {result}")
                result = DEFAULT_FACTOR_RESULT
            elif self.config.enableDetailedLogging:
                log_analysis(
                    COMPONENT,
                    "factor analyzed",
                    level=logging.INFO,
                    log=self.log,
                    factor=analyzer.name,
                    score=round(result.score, 3),
                    status=result.status,
                )
            factors[analyzer.name] = result

        return FactorResults(**factors)

    def weighted_score(self, factors: FactorResults) -> float:
        weights = self.config.weights
        total = sum(factor.score * getattr(weights, name) for name, factor in factors.items())
        return clamp(total)

    def get_config(self) -> SelectionAnalysisConfig:
        return self.config

    def update_config(
        self,
        updates: Union[SelectionAnalysisConfigUpdate, dict],
    ) -> SelectionAnalysisConfig:
        """
        Shallow-merge top-level config keys that are set.

        New weights invalidate every cached snapshot, since cached scores and
        metadata were computed with the old ones.
        """
        if isinstance(updates, dict):
            updates = SelectionAnalysisConfigUpdate(**updates)
        changes = updates.model_dump(exclude_none=True, exclude_unset=True)
        if "weights" in changes:
            changes["weights"] = updates.weights

        previous_weights = self.config.weights
        self.config = self.config.model_copy(update=changes)
        self.cache.ttl = self.config.cacheTimeout
        self.log.info(f"{COMPONENT}: config updated ({', '.join(sorted(changes)) or 'no changes'})")

        if self.config.weights != previous_weights:
            self.clear_cache()
        return self.config

    def get_analyzers(self) -> list[FactorAnalyzer]:
        return list(self.analyzers)

    def clear_cache(self) -> None:
        self.cache.clear()
        log_analysis(COMPONENT, "cache cleared", level=logging.INFO, log=self.log)
