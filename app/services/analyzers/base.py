"""
Common contract for the five selection factor analyzers.

Each analyzer runs a fixed list of weighted sub-checks. A sub-check starts
from a base score, applies additive adjustments from categorical rules and
is clamped to [0, 1] before weighting. The weights of one analyzer sum to 1.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.models.selection import (
    AnalysisContext,
    FactorAnalysis,
    FactorStatus,
    UserProfile,
    WorkoutSelections,
)


EXCELLENT_THRESHOLD = 0.85
GOOD_THRESHOLD = 0.70
WARNING_THRESHOLD = 0.50

BASE_SCORE = 0.8
PERFECT_SCORE = 1.0


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def status_for(score: float) -> FactorStatus:
    """Map a score to its status tier (lower bounds are inclusive)."""
    if score >= EXCELLENT_THRESHOLD:
        return "excellent"
    if score >= GOOD_THRESHOLD:
        return "good"
    if score >= WARNING_THRESHOLD:
        return "warning"
    return "poor"


@dataclass
class SubScore:
    """Result of one weighted sub-check."""
    score: float
    details: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


class FactorAnalyzer(ABC):
    """
    Base class for factor analyzers.

    Subclasses set ``name``, ``weight`` and ``description``, implement
    ``checks`` returning (sub-score, weight) pairs, and supply per-tier
    ``impacts`` text plus a ``reasoning`` method.
    """

    name: str = ""
    weight: float = 0.0
    description: str = ""
    impacts: dict[str, str] = {}

    def analyze(
        self,
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
    ) -> FactorAnalysis:
        """Score this factor for one (profile, selections, context) triple."""
        weighted = self.checks(profile, selections, context)

        score = clamp(sum(clamp(sub.score) * weight for sub, weight in weighted))
        details = [detail for sub, _ in weighted for detail in sub.details]
        suggestions = [text for sub, _ in weighted for text in sub.suggestions]
        status = status_for(score)

        return FactorAnalysis(
            score=score,
            status=status,
            reasoning=self.reasoning(status, profile, selections),
            impact=self.impacts[status],
            details=tuple(details),
            suggestions=tuple(suggestions) if suggestions else None,
        )

    @abstractmethod
    def checks(
        self,
        profile: UserProfile,
        selections: WorkoutSelections,
        context: AnalysisContext,
    ) -> list[tuple[SubScore, float]]:
        """Run the sub-checks and return them with their weights."""

    @abstractmethod
    def reasoning(
        self,
        status: FactorStatus,
        profile: UserProfile,
        selections: WorkoutSelections,
    ) -> str:
        """Explain the score in one or two sentences."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, weight={self.weight})"
