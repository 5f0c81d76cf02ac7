"""
Pydantic models for the selection analysis engine.

Inputs (profile, selections, context) are produced by other parts of the
product and are read-only here. Results are frozen snapshots: a cached
analysis is the same object every caller receives.
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


FACTOR_NAMES = (
    "goalAlignment",
    "intensityMatch",
    "durationFit",
    "recoveryRespect",
    "equipmentOptimization",
)

FactorStatus = Literal["excellent", "good", "warning", "poor"]


# --- User Profile ---

class Preferences(BaseModel):
    """Workout style and assistance preferences."""
    model_config = ConfigDict(frozen=True)

    workoutStyle: list[str] = []
    intensityPreference: Optional[str] = None
    aiAssistanceLevel: Optional[str] = None


class BasicLimitations(BaseModel):
    """Injuries and what the user has access to."""
    model_config = ConfigDict(frozen=True)

    injuries: list[str] = []
    availableEquipment: list[str] = []
    availableLocations: list[str] = []


class WorkoutHistory(BaseModel):
    """Summary of the user's training history."""
    model_config = ConfigDict(frozen=True)

    estimatedCompletedWorkouts: int = Field(0, ge=0)
    averageDuration: Optional[float] = Field(None, gt=0, description="Minutes")
    preferredFocusAreas: list[str] = []
    consistencyScore: Optional[float] = Field(None, ge=0, le=1)
    plateauRisk: Optional[str] = None


class LearningProfile(BaseModel):
    """How the user likes to be guided."""
    model_config = ConfigDict(frozen=True)

    prefersSimplicity: Optional[bool] = None
    explorationTendency: Optional[str] = None


class UserProfile(BaseModel):
    """Profile record produced by the onboarding wizard."""
    model_config = ConfigDict(frozen=True)

    fitnessLevel: Optional[str] = Field(
        None,
        description="User's fitness level",
        examples=["new to exercise", "some experience", "advanced athlete"],
    )
    goals: list[str] = []
    preferences: Preferences = Field(default_factory=Preferences)
    basicLimitations: BasicLimitations = Field(default_factory=BasicLimitations)
    age: Optional[int] = Field(None, ge=10, le=120)
    workoutHistory: Optional[WorkoutHistory] = None
    learningProfile: Optional[LearningProfile] = None


# --- Workout Selections (simple or enhanced shape per field) ---

class FocusSelection(BaseModel):
    """Enhanced focus value."""
    model_config = ConfigDict(frozen=True)

    focus: str
    label: Optional[str] = None
    description: Optional[str] = None


class DurationSelection(BaseModel):
    """Enhanced duration value, in minutes."""
    model_config = ConfigDict(frozen=True)

    duration: float = Field(..., gt=0)
    label: Optional[str] = None


class RatingSelection(BaseModel):
    """Enhanced energy or sleep rating (energy uses a 1-10 scale)."""
    model_config = ConfigDict(frozen=True)

    rating: int = Field(..., ge=1, le=10)
    categories: list[str] = []


class EquipmentSelection(BaseModel):
    """Enhanced equipment selection."""
    model_config = ConfigDict(frozen=True)

    specificEquipment: list[str] = []
    categories: list[str] = []


class ExercisePreference(BaseModel):
    """Enhanced include/exclude exercise preference."""
    model_config = ConfigDict(frozen=True)

    customExercises: str = ""
    exercises: list[str] = []


SimpleRating = Annotated[int, Field(ge=1, le=5)]


class WorkoutSelections(BaseModel):
    """Per-workout options chosen in the workout-options editor."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "focus": "strength training",
                "duration": 45,
                "energy": 4,
                "sleep": 3,
                "equipment": ["dumbbells", "resistance bands"],
            }
        },
    )

    focus: Union[str, FocusSelection, None] = None
    duration: Union[int, float, DurationSelection, None] = None
    energy: Union[SimpleRating, RatingSelection, None] = None
    sleep: Union[SimpleRating, RatingSelection, None] = None
    equipment: Union[list[str], EquipmentSelection, None] = None
    include: Union[str, ExercisePreference, None] = None
    exclude: Union[str, ExercisePreference, None] = None


# --- Analysis Context ---

class EnvironmentalFactors(BaseModel):
    """Optional environment the workout happens in."""
    model_config = ConfigDict(frozen=True)

    weather: Optional[str] = None
    location: Optional[Literal["indoor", "outdoor"]] = None
    temperature: Optional[float] = None


class AnalysisContext(BaseModel):
    """Per-call context assembled by the caller; never persisted."""
    model_config = ConfigDict(frozen=True)

    generationType: Literal["quick", "detailed"] = "detailed"
    userExperience: Literal["first-time", "beginner", "intermediate", "advanced"] = "beginner"
    previousWorkouts: Optional[int] = Field(None, ge=0, description="Workouts in the recent window")
    timeOfDay: Optional[Literal["morning", "afternoon", "evening"]] = None
    environmentalFactors: Optional[EnvironmentalFactors] = None


# --- Results ---

class FactorAnalysis(BaseModel):
    """Score and explanation for one factor."""
    model_config = ConfigDict(frozen=True)

    score: float = Field(..., ge=0, le=1)
    status: FactorStatus
    reasoning: str
    impact: str
    details: tuple[str, ...] = ()
    suggestions: Optional[tuple[str, ...]] = None


class FactorResults(BaseModel):
    """The fixed five-factor map."""
    model_config = ConfigDict(frozen=True)

    goalAlignment: FactorAnalysis
    intensityMatch: FactorAnalysis
    durationFit: FactorAnalysis
    recoveryRespect: FactorAnalysis
    equipmentOptimization: FactorAnalysis

    def items(self) -> list[tuple[str, FactorAnalysis]]:
        """(name, analysis) pairs in the fixed factor order."""
        return [(name, getattr(self, name)) for name in FACTOR_NAMES]


class AnalysisInsight(BaseModel):
    """Categorized observation about the analysis result."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: Literal["positive", "warning", "suggestion", "educational"]
    title: str
    message: str
    factor: str
    priority: int
    actionable: bool


class ImprovementSuggestion(BaseModel):
    """Actionable recommendation derived from an analyzer's raw suggestion."""
    model_config = ConfigDict(frozen=True)

    id: str
    action: str
    description: str
    impact: Literal["high", "medium", "low"]
    estimatedScoreIncrease: float
    quickFix: bool
    category: Literal["goals", "intensity", "duration", "recovery", "equipment"]
    timeRequired: Literal["immediate", "5min", "15min", "30min"]
    priority: int


class EducationalContent(BaseModel):
    """Explanatory content shown alongside the analysis."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str
    category: Literal["selection", "fitness", "safety", "equipment", "goals"]
    priority: int
    learnMoreUrl: Optional[str] = None


class FactorWeights(BaseModel):
    """Per-factor weights; callers keep the sum close to 1.0."""
    model_config = ConfigDict(frozen=True)

    goalAlignment: float = Field(0.25, ge=0, le=1)
    intensityMatch: float = Field(0.25, ge=0, le=1)
    durationFit: float = Field(0.2, ge=0, le=1)
    recoveryRespect: float = Field(0.15, ge=0, le=1)
    equipmentOptimization: float = Field(0.15, ge=0, le=1)


class AnalysisMetadata(BaseModel):
    """Bookkeeping stamped on every fresh analysis."""
    model_config = ConfigDict(frozen=True)

    analysisTime: float = Field(..., description="Milliseconds spent computing")
    factorWeights: FactorWeights
    dataQuality: float = Field(..., ge=0, le=1)
    version: str
    timestamp: datetime


class SelectionAnalysis(BaseModel):
    """Complete selection analysis result."""
    model_config = ConfigDict(frozen=True)

    overallScore: float = Field(..., ge=0, le=1)
    factors: FactorResults
    insights: tuple[AnalysisInsight, ...] = ()
    suggestions: tuple[ImprovementSuggestion, ...] = ()
    educationalContent: tuple[EducationalContent, ...] = ()
    metadata: AnalysisMetadata


class ValidationResult(BaseModel):
    """Outcome of input validation."""

    isValid: bool
    errors: list[str] = []
    warnings: list[str] = []
    dataQuality: float = Field(..., ge=0, le=1)


class QuickAnalysis(BaseModel):
    """Four-tier summary for lightweight display."""

    score: float
    status: FactorStatus
    message: str
    topSuggestion: Optional[str] = None


# --- Configuration ---

class SelectionAnalysisConfig(BaseModel):
    """Engine configuration owned by the service facade."""
    model_config = ConfigDict(frozen=True)

    weights: FactorWeights = Field(default_factory=FactorWeights)
    enableCaching: bool = True
    cacheTimeout: float = Field(300, gt=0, description="Cache time-to-live in seconds")
    enableDetailedLogging: bool = False


class SelectionAnalysisConfigUpdate(BaseModel):
    """Partial config; only the fields that are set are merged."""

    weights: Optional[FactorWeights] = None
    enableCaching: Optional[bool] = None
    cacheTimeout: Optional[float] = Field(None, gt=0)
    enableDetailedLogging: Optional[bool] = None
