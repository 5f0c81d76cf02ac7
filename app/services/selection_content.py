"""
Turns factor results into user-facing insights, improvement suggestions and
educational content. All functions here are pure.

Two sources feed each list: rules derived from the factor results themselves,
and a curated content library whose entries carry conditions on factor
scores, profile and selections.
"""
import operator
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from app.models.selection import (
    AnalysisContext,
    AnalysisInsight,
    EducationalContent,
    FactorResults,
    ImprovementSuggestion,
    UserProfile,
    WorkoutSelections,
)
from app.services import selection_fields as fields


FACTOR_DISPLAY_NAMES = {
    "goalAlignment": "Goal Alignment",
    "intensityMatch": "Intensity Match",
    "durationFit": "Duration Fit",
    "recoveryRespect": "Recovery Respect",
    "equipmentOptimization": "Equipment Optimization",
}

SUGGESTION_CATEGORIES = {
    "goalAlignment": "goals",
    "intensityMatch": "intensity",
    "durationFit": "duration",
    "recoveryRespect": "recovery",
    "equipmentOptimization": "equipment",
}

CATEGORY_FACTORS = {category: factor for factor, category in SUGGESTION_CATEGORIES.items()}

EDUCATIONAL_CATEGORIES = {
    "goalAlignment": "goals",
    "intensityMatch": "fitness",
    "durationFit": "fitness",
    "recoveryRespect": "safety",
    "equipmentOptimization": "equipment",
}

FACTOR_ORDER = {
    "goalAlignment": 1,
    "intensityMatch": 2,
    "durationFit": 3,
    "recoveryRespect": 4,
    "equipmentOptimization": 5,
}

# Overall insight per tier: (lower bound, id, type, title, message, priority, actionable)
OVERALL_INSIGHTS = (
    (0.85, "excellent-overall", "positive", "Excellent Selections!",
     "Your workout selections are perfectly aligned with your profile and goals.", 1, False),
    (0.70, "good-overall", "positive", "Good Selections",
     "Your selections generally work well with your profile and goals.", 2, False),
    (0.50, "moderate-overall", "warning", "Room for Improvement",
     "Some selections could be optimized for better results.", 3, True),
    (0.0, "poor-overall", "warning", "Consider Adjustments",
     "Your selections may not optimally support your goals.", 4, True),
)

NEEDS_ATTENTION_BELOW = 0.6
EXCELLENT_FROM = 0.9
LEARN_BELOW = 0.7
LOW_SCORE_BELOW = 0.6

# Library insights sort after every rule-based insight
LIBRARY_INSIGHT_PRIORITY = 6
LIBRARY_CONTENT_LIMIT = 3
LIBRARY_SUGGESTION_LIMIT = 5

DEFAULT_ENERGY_RATING = 5
DEFAULT_AGE = 30

QUICK_FIX_KEYWORDS = ("consider", "try", "switch", "change")

IMPACT_ORDER = {"high": 3, "medium": 2, "low": 1}


# --- Library conditions ---

@dataclass(frozen=True)
class ContentContext:
    """Everything library conditions may look at for one analysis."""
    profile: UserProfile
    selections: WorkoutSelections
    factor_scores: dict[str, float]
    overall_score: float
    context: Optional[AnalysisContext] = None

    @classmethod
    def from_factors(
        cls,
        profile: UserProfile,
        selections: WorkoutSelections,
        factors: FactorResults,
        overall_score: float,
        context: Optional[AnalysisContext] = None,
    ) -> "ContentContext":
        scores = {name: factor.score for name, factor in factors.items()}
        return cls(profile, selections, scores, overall_score, context)

    @property
    def fitness_level(self) -> str:
        return fields.experience_level(self.profile)


def _recent_workouts(ctx: ContentContext) -> Optional[int]:
    return ctx.context.previousWorkouts if ctx.context is not None else None


# Named inputs a condition can test, besides the five factor scores
CONTENT_FIELDS: dict[str, Callable[[ContentContext], object]] = {
    "fitnessLevel": lambda ctx: ctx.fitness_level,
    "goals": lambda ctx: [goal.strip().lower() for goal in ctx.profile.goals],
    "injuryCount": lambda ctx: len(fields.injuries(ctx.profile)),
    "equipmentCount": lambda ctx: len(ctx.profile.basicLimitations.availableEquipment),
    "locationCount": lambda ctx: len(ctx.profile.basicLimitations.availableLocations),
    "averageDuration": lambda ctx: fields.average_duration(ctx.profile),
    "focus": lambda ctx: fields.focus_key(ctx.selections),
    "energy": lambda ctx: fields.energy_rating(ctx.selections),
    "duration": lambda ctx: fields.duration_minutes(ctx.selections),
    "sleep": lambda ctx: fields.sleep_rating(ctx.selections),
    "recentWorkouts": _recent_workouts,
}

OPERATORS = {
    "lt": operator.lt,
    "lte": operator.le,
    "eq": operator.eq,
    "gte": operator.ge,
    "gt": operator.gt,
    "contains": operator.contains,
}


class Condition(NamedTuple):
    field: str
    operator: str
    value: object


def resolve_field(name: str, ctx: ContentContext):
    """A factor score, a named profile/selection field, or None."""
    if name in FACTOR_ORDER:
        return ctx.factor_scores.get(name)
    resolver = CONTENT_FIELDS.get(name)
    return resolver(ctx) if resolver is not None else None


def evaluate_condition(condition: Condition, ctx: ContentContext) -> bool:
    """Missing values never satisfy a condition."""
    actual = resolve_field(condition.field, ctx)
    if actual is None:
        return False
    return bool(OPERATORS[condition.operator](actual, condition.value))


def evaluate_conditions(conditions: tuple[Condition, ...], ctx: ContentContext) -> bool:
    return all(evaluate_condition(condition, ctx) for condition in conditions)


# --- Educational content library ---

@dataclass(frozen=True)
class EducationalTemplate:
    id: str
    title: str
    content: str
    category: str
    priority: int
    learnMoreUrl: Optional[str] = None
    conditions: tuple[Condition, ...] = ()
    targetAudience: str = "all"

    def to_content(self) -> EducationalContent:
        return EducationalContent(
            id=self.id,
            title=self.title,
            content=self.content,
            category=self.category,
            priority=self.priority,
            learnMoreUrl=self.learnMoreUrl,
        )


SELECTION_EDUCATION = (
    EducationalTemplate(
        id="selection-basics",
        title="Understanding Workout Selection",
        content=(
            "Your workout selections directly impact the effectiveness and safety of your training. "
            "Consider how each choice aligns with your goals, fitness level, and available resources."
        ),
        category="selection",
        priority=1,
        learnMoreUrl="/education/workout-selection-basics",
    ),
    EducationalTemplate(
        id="selection-progressive-disclosure",
        title="Progressive Workout Planning",
        content=(
            "Start with foundational movements and gradually increase complexity. This approach builds "
            "confidence, prevents injury, and ensures long-term progress."
        ),
        category="selection",
        priority=2,
        learnMoreUrl="/education/progressive-training",
        conditions=(Condition("fitnessLevel", "eq", "beginner"),),
        targetAudience="beginner",
    ),
)

FITNESS_EDUCATION = (
    EducationalTemplate(
        id="fitness-goal-setting",
        title="Setting Realistic Fitness Goals",
        content=(
            "Effective goal setting involves creating specific, measurable, and achievable targets. "
            "Consider your current fitness level and available time when planning."
        ),
        category="fitness",
        priority=1,
        learnMoreUrl="/education/goal-setting",
        conditions=(Condition("goalAlignment", "lt", 0.7),),
    ),
    EducationalTemplate(
        id="fitness-intensity-understanding",
        title="Understanding Workout Intensity",
        content=(
            "Intensity refers to how hard you work during exercise. It should match your fitness level "
            "and goals, balancing challenge with safety."
        ),
        category="fitness",
        priority=2,
        learnMoreUrl="/education/intensity-guide",
        conditions=(Condition("intensityMatch", "lt", 0.7),),
    ),
    EducationalTemplate(
        id="fitness-duration-optimization",
        title="Optimizing Workout Duration",
        content=(
            "Workout duration should balance effectiveness with your available time. "
            "Quality often matters more than quantity."
        ),
        category="fitness",
        priority=2,
        learnMoreUrl="/education/workout-duration",
        conditions=(Condition("durationFit", "lt", 0.7),),
    ),
)

SAFETY_EDUCATION = (
    EducationalTemplate(
        id="safety-injury-prevention",
        title="Injury Prevention Fundamentals",
        content=(
            "Proper form, adequate warm-up, and listening to your body are essential for preventing "
            "injuries and maintaining long-term fitness."
        ),
        category="safety",
        priority=1,
        learnMoreUrl="/education/injury-prevention",
        conditions=(Condition("recoveryRespect", "lt", 0.7),),
    ),
    EducationalTemplate(
        id="safety-recovery-importance",
        title="The Importance of Recovery",
        content=(
            "Recovery is when your body adapts and grows stronger. Adequate rest, sleep, and nutrition "
            "are crucial for progress."
        ),
        category="safety",
        priority=2,
        learnMoreUrl="/education/recovery-basics",
        conditions=(Condition("recoveryRespect", "lt", 0.6),),
    ),
    EducationalTemplate(
        id="safety-beginner-guidance",
        title="Safe Progression for Beginners",
        content=(
            "Start slowly and focus on proper form. It's better to do fewer repetitions correctly "
            "than many with poor technique."
        ),
        category="safety",
        priority=1,
        learnMoreUrl="/education/beginner-safety",
        conditions=(Condition("fitnessLevel", "eq", "beginner"),),
        targetAudience="beginner",
    ),
)

EQUIPMENT_EDUCATION = (
    EducationalTemplate(
        id="equipment-bodyweight-basics",
        title="Effective Bodyweight Training",
        content=(
            "Bodyweight exercises can be highly effective and require minimal equipment. "
            "Focus on proper form and progressive difficulty."
        ),
        category="equipment",
        priority=1,
        learnMoreUrl="/education/bodyweight-exercises",
        conditions=(
            Condition("equipmentOptimization", "lt", 0.6),
            Condition("equipmentCount", "lt", 2),
        ),
    ),
    EducationalTemplate(
        id="equipment-space-optimization",
        title="Working Out in Small Spaces",
        content=(
            "Limited space doesn't mean limited results. "
            "Choose exercises that work well in your available area."
        ),
        category="equipment",
        priority=2,
        learnMoreUrl="/education/small-space-workouts",
        conditions=(
            Condition("equipmentOptimization", "lt", 0.6),
            Condition("locationCount", "lt", 2),
        ),
    ),
    EducationalTemplate(
        id="equipment-investment-guide",
        title="Smart Equipment Investment",
        content=(
            "Consider your goals and space when choosing equipment. "
            "Start with versatile, affordable options."
        ),
        category="equipment",
        priority=3,
        learnMoreUrl="/education/equipment-guide",
        conditions=(Condition("equipmentOptimization", "lt", 0.5),),
    ),
)

GOAL_EDUCATION = (
    EducationalTemplate(
        id="goal-weight-loss-science",
        title="Weight Loss Science",
        content=(
            "Weight loss requires a calorie deficit. Cardio burns more calories during exercise, "
            "while strength training increases metabolic rate long-term."
        ),
        category="goals",
        priority=1,
        learnMoreUrl="/education/weight-loss-science",
        conditions=(Condition("goals", "contains", "weight loss"),),
    ),
    EducationalTemplate(
        id="goal-strength-building",
        title="Building Strength and Muscle",
        content=(
            "Strength training with progressive overload is key to building muscle. "
            "Focus on compound movements and proper form."
        ),
        category="goals",
        priority=1,
        learnMoreUrl="/education/strength-building",
        conditions=(Condition("goals", "contains", "strength"),),
    ),
    EducationalTemplate(
        id="goal-flexibility-mobility",
        title="Improving Flexibility and Mobility",
        content=(
            "Flexibility training improves range of motion and can prevent injury. "
            "Include both static and dynamic stretching."
        ),
        category="goals",
        priority=1,
        learnMoreUrl="/education/flexibility-training",
        conditions=(Condition("goals", "contains", "flexibility"),),
    ),
    EducationalTemplate(
        id="goal-endurance-building",
        title="Building Endurance",
        content=(
            "Endurance training improves cardiovascular health and stamina. "
            "Gradually increase duration and intensity."
        ),
        category="goals",
        priority=1,
        learnMoreUrl="/education/endurance-training",
        conditions=(Condition("goals", "contains", "endurance"),),
    ),
)

ALL_EDUCATIONAL_CONTENT = (
    SELECTION_EDUCATION + FITNESS_EDUCATION + SAFETY_EDUCATION + EQUIPMENT_EDUCATION + GOAL_EDUCATION
)

SELECTION_BASICS = SELECTION_EDUCATION[0].to_content()


def matches_target_audience(template: EducationalTemplate, fitness_level: str) -> bool:
    return template.targetAudience in ("all", fitness_level)


def _by_priority(templates, limit: Optional[int]):
    ordered = sorted(templates, key=lambda template: template.priority)
    return ordered if limit is None else ordered[:limit]


def applicable_educational_content(
    ctx: ContentContext,
    max_content: Optional[int] = LIBRARY_CONTENT_LIMIT,
) -> list[EducationalTemplate]:
    """Library entries whose conditions hold and whose audience fits, by priority."""
    return _by_priority(
        (
            template for template in ALL_EDUCATIONAL_CONTENT
            if evaluate_conditions(template.conditions, ctx)
            and matches_target_audience(template, ctx.fitness_level)
        ),
        max_content,
    )


def category_educational_content(
    category: str,
    ctx: ContentContext,
    max_content: int = 2,
) -> list[EducationalTemplate]:
    return [
        template for template in applicable_educational_content(ctx, max_content=None)
        if template.category == category
    ][:max_content]


def low_score_educational_content(ctx: ContentContext, max_content: int = 2) -> list[EducationalTemplate]:
    """Applicable entries triggered by a factor scoring below 0.6."""
    low_factors = {name for name, score in ctx.factor_scores.items() if score < LOW_SCORE_BELOW}
    return [
        template for template in applicable_educational_content(ctx, max_content=None)
        if any(condition.field in low_factors for condition in template.conditions)
    ][:max_content]


def beginner_educational_content(ctx: ContentContext, max_content: int = 2) -> list[EducationalTemplate]:
    return _by_priority(
        (
            template for template in ALL_EDUCATIONAL_CONTENT
            if template.targetAudience == "beginner" and evaluate_conditions(template.conditions, ctx)
        ),
        max_content,
    )


# --- Suggestion library ---

@dataclass(frozen=True)
class SuggestionTemplate:
    id: str
    action: str
    description: str
    impact: str
    estimatedScoreIncrease: float
    quickFix: bool
    category: str
    timeRequired: str
    priority: int
    conditions: tuple[Condition, ...] = ()

    def to_suggestion(self) -> ImprovementSuggestion:
        return ImprovementSuggestion(
            id=self.id,
            action=self.action,
            description=self.description,
            impact=self.impact,
            estimatedScoreIncrease=self.estimatedScoreIncrease,
            quickFix=self.quickFix,
            category=self.category,
            timeRequired=self.timeRequired,
            priority=self.priority * 10 + FACTOR_ORDER[CATEGORY_FACTORS[self.category]],
        )


GOAL_ALIGNMENT_SUGGESTIONS = (
    SuggestionTemplate(
        id="goal-weight-loss-cardio",
        action="Switch to Cardio Focus",
        description=(
            "Cardio workouts burn more calories during the session, "
            "making them more effective for weight loss goals."
        ),
        impact="high",
        estimatedScoreIncrease=0.3,
        quickFix=True,
        category="goals",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("goalAlignment", "lt", 0.5),
            Condition("goals", "contains", "weight loss"),
            Condition("focus", "contains", "strength"),
        ),
    ),
    SuggestionTemplate(
        id="goal-strength-focus",
        action="Choose Strength Focus",
        description="Strength training is essential for building muscle mass and increasing metabolic rate.",
        impact="high",
        estimatedScoreIncrease=0.25,
        quickFix=True,
        category="goals",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("goalAlignment", "lt", 0.5),
            Condition("goals", "contains", "strength"),
            Condition("focus", "contains", "cardio"),
        ),
    ),
    SuggestionTemplate(
        id="goal-flexibility-session",
        action="Add Flexibility Session",
        description="Include dedicated flexibility training to improve range of motion and prevent injury.",
        impact="medium",
        estimatedScoreIncrease=0.2,
        quickFix=False,
        category="goals",
        timeRequired="15min",
        priority=2,
        conditions=(
            Condition("goalAlignment", "lt", 0.6),
            Condition("goals", "contains", "flexibility"),
        ),
    ),
)

INTENSITY_MATCH_SUGGESTIONS = (
    SuggestionTemplate(
        id="intensity-beginner-reduce",
        action="Reduce Intensity Level",
        description="Start with lower intensity to build proper form and endurance before progressing.",
        impact="high",
        estimatedScoreIncrease=0.3,
        quickFix=True,
        category="intensity",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("intensityMatch", "lt", 0.5),
            Condition("fitnessLevel", "eq", "beginner"),
            Condition("energy", "gt", 7),
        ),
    ),
    SuggestionTemplate(
        id="intensity-advanced-increase",
        action="Increase Intensity Level",
        description="Higher intensity will provide the challenge needed for your advanced fitness level.",
        impact="high",
        estimatedScoreIncrease=0.25,
        quickFix=True,
        category="intensity",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("intensityMatch", "lt", 0.5),
            Condition("fitnessLevel", "eq", "advanced"),
            Condition("energy", "lt", 4),
        ),
    ),
    SuggestionTemplate(
        id="intensity-progressive-overload",
        action="Implement Progressive Overload",
        description="Gradually increase intensity over time to continue making progress.",
        impact="medium",
        estimatedScoreIncrease=0.15,
        quickFix=False,
        category="intensity",
        timeRequired="30min",
        priority=2,
        conditions=(
            Condition("intensityMatch", "lt", 0.7),
            Condition("fitnessLevel", "eq", "intermediate"),
        ),
    ),
)

DURATION_FIT_SUGGESTIONS = (
    SuggestionTemplate(
        id="duration-beginner-shorten",
        action="Shorten Workout Duration",
        description="Start with shorter sessions to build endurance and maintain proper form.",
        impact="high",
        estimatedScoreIncrease=0.25,
        quickFix=True,
        category="duration",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("durationFit", "lt", 0.5),
            Condition("fitnessLevel", "eq", "beginner"),
            Condition("duration", "gt", 30),
        ),
    ),
    SuggestionTemplate(
        id="duration-advanced-extend",
        action="Extend Workout Duration",
        description="Longer sessions will provide sufficient training stimulus for your advanced level.",
        impact="high",
        estimatedScoreIncrease=0.25,
        quickFix=True,
        category="duration",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("durationFit", "lt", 0.5),
            Condition("fitnessLevel", "eq", "advanced"),
            Condition("duration", "lt", 20),
        ),
    ),
    SuggestionTemplate(
        id="duration-time-management",
        action="Optimize Time Management",
        description="Plan your workout schedule to accommodate longer sessions when needed.",
        impact="medium",
        estimatedScoreIncrease=0.15,
        quickFix=False,
        category="duration",
        timeRequired="15min",
        priority=2,
        conditions=(
            Condition("durationFit", "lt", 0.7),
            Condition("averageDuration", "lt", 45),
        ),
    ),
)

RECOVERY_RESPECT_SUGGESTIONS = (
    SuggestionTemplate(
        id="recovery-injury-modify",
        action="Modify for Injury Safety",
        description=(
            "Choose lower intensity and injury-safe movements "
            "to prevent aggravating existing conditions."
        ),
        impact="high",
        estimatedScoreIncrease=0.3,
        quickFix=True,
        category="recovery",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("recoveryRespect", "lt", 0.5),
            Condition("injuryCount", "gt", 0),
        ),
    ),
    SuggestionTemplate(
        id="recovery-rest-day",
        action="Take a Rest Day",
        description="Allow adequate recovery time to prevent overtraining and improve performance.",
        impact="high",
        estimatedScoreIncrease=0.25,
        quickFix=True,
        category="recovery",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("recoveryRespect", "lt", 0.5),
            Condition("recentWorkouts", "gte", 3),
        ),
    ),
    SuggestionTemplate(
        id="recovery-sleep-optimize",
        action="Optimize Sleep Schedule",
        description="Ensure adequate sleep to support recovery and muscle growth.",
        impact="medium",
        estimatedScoreIncrease=0.15,
        quickFix=False,
        category="recovery",
        timeRequired="30min",
        priority=2,
        conditions=(
            Condition("recoveryRespect", "lt", 0.7),
            Condition("sleep", "lte", 2),
        ),
    ),
)

EQUIPMENT_OPTIMIZATION_SUGGESTIONS = (
    SuggestionTemplate(
        id="equipment-bodyweight-focus",
        action="Focus on Bodyweight Exercises",
        description="Bodyweight exercises can be highly effective and require minimal equipment.",
        impact="high",
        estimatedScoreIncrease=0.25,
        quickFix=True,
        category="equipment",
        timeRequired="immediate",
        priority=1,
        conditions=(
            Condition("equipmentOptimization", "lt", 0.5),
            Condition("equipmentCount", "lt", 2),
        ),
    ),
    SuggestionTemplate(
        id="equipment-invest-basics",
        action="Invest in Basic Equipment",
        description="Consider purchasing resistance bands or dumbbells for more workout variety.",
        impact="medium",
        estimatedScoreIncrease=0.2,
        quickFix=False,
        category="equipment",
        timeRequired="30min",
        priority=2,
        conditions=(
            Condition("equipmentOptimization", "lt", 0.6),
            Condition("equipmentCount", "lt", 3),
        ),
    ),
    SuggestionTemplate(
        id="equipment-space-optimize",
        action="Optimize for Small Space",
        description="Choose exercises that work well in limited space without compromising effectiveness.",
        impact="medium",
        estimatedScoreIncrease=0.15,
        quickFix=False,
        category="equipment",
        timeRequired="15min",
        priority=2,
        conditions=(
            Condition("equipmentOptimization", "lt", 0.6),
            Condition("locationCount", "lt", 2),
        ),
    ),
)

ALL_SUGGESTIONS = (
    GOAL_ALIGNMENT_SUGGESTIONS
    + INTENSITY_MATCH_SUGGESTIONS
    + DURATION_FIT_SUGGESTIONS
    + RECOVERY_RESPECT_SUGGESTIONS
    + EQUIPMENT_OPTIMIZATION_SUGGESTIONS
)


def applicable_suggestions(
    ctx: ContentContext,
    max_suggestions: int = LIBRARY_SUGGESTION_LIMIT,
) -> list[SuggestionTemplate]:
    """Library suggestions whose conditions hold: by priority, then higher impact first."""
    matching = [template for template in ALL_SUGGESTIONS if evaluate_conditions(template.conditions, ctx)]
    matching.sort(key=lambda template: (template.priority, -IMPACT_ORDER[template.impact]))
    return matching[:max_suggestions]


def factor_suggestions(category: str, ctx: ContentContext, max_suggestions: int = 3) -> list[SuggestionTemplate]:
    return _by_priority(
        (
            template for template in ALL_SUGGESTIONS
            if template.category == category and evaluate_conditions(template.conditions, ctx)
        ),
        max_suggestions,
    )


def quick_fix_suggestions(ctx: ContentContext, max_suggestions: int = 3) -> list[SuggestionTemplate]:
    return _by_priority(
        (
            template for template in ALL_SUGGESTIONS
            if template.quickFix and evaluate_conditions(template.conditions, ctx)
        ),
        max_suggestions,
    )


# --- Insight library ---

@dataclass(frozen=True)
class InsightTemplate:
    title: str
    explanation: str
    category: str
    priority: int
    suggestion: Optional[str] = None
    learnMore: Optional[str] = None


GOAL_ALIGNMENT_TEMPLATES = {
    "poor": {
        "weight_loss_strength": InsightTemplate(
            title="Selection-Goal Mismatch",
            explanation=(
                "Strength training alone may not optimize calorie burn for weight loss. While building "
                "muscle is beneficial, cardio and HIIT workouts typically burn more calories during the session."
            ),
            suggestion=(
                "Consider 'Quick Sweat' or 'Cardio' focus for better weight loss results, "
                "or combine strength with cardio intervals."
            ),
            learnMore="/education/weight-loss-workout-selection",
            priority=1,
            category="goals",
        ),
        "strength_cardio": InsightTemplate(
            title="Goal-Focus Misalignment",
            explanation=(
                "Cardio workouts are excellent for heart health and endurance, but may not be the most "
                "efficient path to building strength and muscle mass."
            ),
            suggestion=(
                "Try 'Strength' or 'Power' focus for better muscle building results, "
                "or consider a balanced approach."
            ),
            learnMore="/education/strength-training-basics",
            priority=1,
            category="goals",
        ),
        "flexibility_strength": InsightTemplate(
            title="Flexibility Goal Overlooked",
            explanation=(
                "Strength training is valuable, but it may not address your flexibility goals. "
                "Static stretching and mobility work are essential for improving range of motion."
            ),
            suggestion="Consider 'Flexibility' focus or add dedicated stretching sessions to your routine.",
            learnMore="/education/flexibility-training",
            priority=2,
            category="goals",
        ),
    },
    "warning": {
        "weight_loss_moderate": InsightTemplate(
            title="Moderate Intensity for Weight Loss",
            explanation=(
                "Moderate intensity workouts can support weight loss, but higher intensity intervals "
                "often provide better results in less time."
            ),
            suggestion=(
                "Consider increasing intensity to 'High' for more efficient calorie burn, "
                "or extend your workout duration."
            ),
            learnMore="/education/intensity-for-weight-loss",
            priority=2,
            category="goals",
        ),
    },
    "good": {
        "strength_strength": InsightTemplate(
            title="Excellent Goal Alignment",
            explanation=(
                "Your strength focus perfectly matches your strength-building goals. This selection "
                "will effectively target muscle growth and strength development."
            ),
            suggestion="Consider progressive overload techniques to maximize your strength gains.",
            learnMore="/education/progressive-overload",
            priority=3,
            category="goals",
        ),
    },
}

INTENSITY_MATCH_TEMPLATES = {
    "poor": {
        "beginner_high": InsightTemplate(
            title="Intensity Too High for Experience",
            explanation=(
                "High intensity workouts can be overwhelming for beginners and may lead to burnout or "
                "injury. It's important to build a foundation first."
            ),
            suggestion=(
                "Start with 'Low' or 'Moderate' intensity to build endurance and proper form "
                "before progressing."
            ),
            learnMore="/education/beginner-workout-progression",
            priority=1,
            category="intensity",
        ),
        "advanced_low": InsightTemplate(
            title="Intensity Below Your Level",
            explanation=(
                "Low intensity workouts may not provide sufficient challenge for your fitness level, "
                "potentially limiting your progress and results."
            ),
            suggestion="Consider 'Moderate' or 'High' intensity to maintain progress and continue challenging your body.",
            learnMore="/education/advanced-workout-intensity",
            priority=1,
            category="intensity",
        ),
    },
    "warning": {
        "intermediate_high": InsightTemplate(
            title="High Intensity Challenge",
            explanation=(
                "High intensity workouts can be effective but ensure you have adequate recovery time "
                "and proper form to prevent injury."
            ),
            suggestion="Monitor your recovery and consider alternating with moderate intensity sessions.",
            learnMore="/education/recovery-and-intensity",
            priority=2,
            category="intensity",
        ),
    },
    "good": {
        "intermediate_moderate": InsightTemplate(
            title="Perfect Intensity Match",
            explanation=(
                "Moderate intensity aligns well with your intermediate fitness level, providing "
                "effective training without overwhelming your system."
            ),
            suggestion="Consider gradually increasing intensity as you build confidence and strength.",
            learnMore="/education/intensity-progression",
            priority=3,
            category="intensity",
        ),
    },
}

DURATION_FIT_TEMPLATES = {
    "poor": {
        "beginner_long": InsightTemplate(
            title="Duration May Be Too Long",
            explanation=(
                "Long workouts can be challenging for beginners and may lead to fatigue or poor form. "
                "It's better to start shorter and build up."
            ),
            suggestion="Start with 20-30 minute sessions to build endurance and proper technique.",
            learnMore="/education/beginner-workout-duration",
            priority=1,
            category="duration",
        ),
        "advanced_short": InsightTemplate(
            title="Short Duration for Your Level",
            explanation=(
                "Short workouts may not provide sufficient training stimulus for your advanced fitness "
                "level, limiting your progress potential."
            ),
            suggestion="Consider 30-45 minute sessions for more comprehensive training and better results.",
            learnMore="/education/advanced-workout-planning",
            priority=1,
            category="duration",
        ),
    },
    "warning": {
        "intermediate_long": InsightTemplate(
            title="Longer Workout Consideration",
            explanation=(
                "Longer workouts can be effective but ensure you have adequate time and energy to "
                "maintain quality throughout the session."
            ),
            suggestion="Consider breaking into shorter sessions if time or energy is limited.",
            learnMore="/education/workout-scheduling",
            priority=2,
            category="duration",
        ),
    },
    "good": {
        "intermediate_optimal": InsightTemplate(
            title="Optimal Duration Selection",
            explanation=(
                "A 20-30 minute session provides an excellent balance of training stimulus and time "
                "efficiency for your fitness level."
            ),
            suggestion="Focus on workout quality and intensity to make the most of each session.",
            learnMore="/education/time-efficient-workouts",
            priority=3,
            category="duration",
        ),
    },
}

RECOVERY_RESPECT_TEMPLATES = {
    "poor": {
        "injury_high": InsightTemplate(
            title="High Intensity with Injury Risk",
            explanation=(
                "High intensity workouts may aggravate existing injuries or limitations. "
                "It's crucial to prioritize safety and proper recovery."
            ),
            suggestion="Consider 'Low' or 'Moderate' intensity and focus on proper form and injury-safe movements.",
            learnMore="/education/workout-injury-prevention",
            priority=1,
            category="recovery",
        ),
        "recent_workout": InsightTemplate(
            title="Insufficient Recovery Time",
            explanation=(
                "Working out too soon after your last session may not allow adequate recovery, "
                "potentially leading to decreased performance or injury."
            ),
            suggestion="Consider taking a rest day or choosing a lighter, recovery-focused session.",
            learnMore="/education/recovery-timing",
            priority=1,
            category="recovery",
        ),
    },
    "warning": {
        "age_recovery": InsightTemplate(
            title="Recovery Considerations",
            explanation=(
                "As we age, recovery becomes increasingly important. Consider incorporating more "
                "rest days and recovery-focused sessions."
            ),
            suggestion="Listen to your body and don't hesitate to take extra recovery time when needed.",
            learnMore="/education/aging-and-recovery",
            priority=2,
            category="recovery",
        ),
    },
    "good": {
        "proper_recovery": InsightTemplate(
            title="Excellent Recovery Awareness",
            explanation=(
                "Your selections show good awareness of recovery needs, which will help maintain "
                "long-term progress and prevent injury."
            ),
            suggestion="Continue monitoring your recovery and adjust intensity as needed.",
            learnMore="/education/recovery-monitoring",
            priority=3,
            category="recovery",
        ),
    },
}

EQUIPMENT_OPTIMIZATION_TEMPLATES = {
    "poor": {
        "limited_equipment": InsightTemplate(
            title="Equipment Limitations",
            explanation=(
                "Your available equipment may limit the variety and effectiveness of your workouts. "
                "Consider bodyweight alternatives or equipment upgrades."
            ),
            suggestion=(
                "Explore bodyweight exercises or consider investing in basic equipment "
                "like resistance bands or dumbbells."
            ),
            learnMore="/education/bodyweight-workouts",
            priority=1,
            category="equipment",
        ),
        "space_constraints": InsightTemplate(
            title="Space Considerations",
            explanation=(
                "Limited space may restrict certain movements and exercises. "
                "Consider space-efficient alternatives."
            ),
            suggestion=(
                "Focus on exercises that work well in your available space, "
                "such as bodyweight movements or compact equipment."
            ),
            learnMore="/education/small-space-workouts",
            priority=1,
            category="equipment",
        ),
    },
    "warning": {
        "equipment_variety": InsightTemplate(
            title="Equipment Variety Opportunity",
            explanation=(
                "While your current equipment works, adding variety could enhance your workouts "
                "and prevent plateaus."
            ),
            suggestion="Consider incorporating different equipment or exercise variations to keep your routine fresh.",
            learnMore="/education/workout-variety",
            priority=2,
            category="equipment",
        ),
    },
    "good": {
        "optimal_equipment": InsightTemplate(
            title="Excellent Equipment Utilization",
            explanation=(
                "Your equipment selection allows for effective, varied workouts "
                "that can support your fitness goals."
            ),
            suggestion="Continue exploring different exercises and variations with your available equipment.",
            learnMore="/education/equipment-workout-ideas",
            priority=3,
            category="equipment",
        ),
    },
}

# Template tiers: poor below 0.5, warning below 0.7, good otherwise
POOR_TEMPLATE_BELOW = 0.5
WARNING_TEMPLATE_BELOW = 0.7


def _template_tier(score: float) -> str:
    if score < POOR_TEMPLATE_BELOW:
        return "poor"
    if score < WARNING_TEMPLATE_BELOW:
        return "warning"
    return "good"


def _energy(ctx: ContentContext) -> int:
    return fields.energy_rating(ctx.selections) or DEFAULT_ENERGY_RATING


def select_goal_alignment_template(ctx: ContentContext, score: float) -> Optional[InsightTemplate]:
    goals = CONTENT_FIELDS["goals"](ctx)
    focus = fields.focus_key(ctx.selections)
    tier = _template_tier(score)

    if tier == "poor":
        if "weight loss" in goals and "strength" in focus:
            return GOAL_ALIGNMENT_TEMPLATES["poor"]["weight_loss_strength"]
        if "strength" in goals and "cardio" in focus:
            return GOAL_ALIGNMENT_TEMPLATES["poor"]["strength_cardio"]
        if "flexibility" in goals and "strength" in focus:
            return GOAL_ALIGNMENT_TEMPLATES["poor"]["flexibility_strength"]
    elif tier == "warning":
        if "weight loss" in goals:
            return GOAL_ALIGNMENT_TEMPLATES["warning"]["weight_loss_moderate"]
    elif "strength" in goals and "strength" in focus:
        return GOAL_ALIGNMENT_TEMPLATES["good"]["strength_strength"]
    return None


def select_intensity_match_template(ctx: ContentContext, score: float) -> Optional[InsightTemplate]:
    level = ctx.fitness_level
    energy = _energy(ctx)
    tier = _template_tier(score)

    if tier == "poor":
        if level == "beginner" and energy > 7:
            return INTENSITY_MATCH_TEMPLATES["poor"]["beginner_high"]
        if level == "advanced" and energy < 4:
            return INTENSITY_MATCH_TEMPLATES["poor"]["advanced_low"]
    elif tier == "warning":
        if level == "intermediate" and energy > 7:
            return INTENSITY_MATCH_TEMPLATES["warning"]["intermediate_high"]
    elif level == "intermediate" and 5 <= energy <= 7:
        return INTENSITY_MATCH_TEMPLATES["good"]["intermediate_moderate"]
    return None


def select_duration_fit_template(ctx: ContentContext, score: float) -> Optional[InsightTemplate]:
    level = ctx.fitness_level
    minutes = fields.duration_minutes(ctx.selections)
    if minutes is None:
        return None
    tier = _template_tier(score)

    if tier == "poor":
        if level == "beginner" and minutes > 30:
            return DURATION_FIT_TEMPLATES["poor"]["beginner_long"]
        if level == "advanced" and minutes < 20:
            return DURATION_FIT_TEMPLATES["poor"]["advanced_short"]
    elif tier == "warning":
        if level == "intermediate" and minutes > 30:
            return DURATION_FIT_TEMPLATES["warning"]["intermediate_long"]
    elif level == "intermediate" and 20 <= minutes <= 30:
        return DURATION_FIT_TEMPLATES["good"]["intermediate_optimal"]
    return None


def select_recovery_respect_template(ctx: ContentContext, score: float) -> Optional[InsightTemplate]:
    tier = _template_tier(score)

    if tier == "poor":
        if fields.injuries(ctx.profile) and _energy(ctx) > 7:
            return RECOVERY_RESPECT_TEMPLATES["poor"]["injury_high"]
        recent = _recent_workouts(ctx)
        if recent is not None and recent >= 3:
            return RECOVERY_RESPECT_TEMPLATES["poor"]["recent_workout"]
        return None
    if tier == "warning":
        age = ctx.profile.age or DEFAULT_AGE
        return RECOVERY_RESPECT_TEMPLATES["warning"]["age_recovery"] if age > 40 else None
    return RECOVERY_RESPECT_TEMPLATES["good"]["proper_recovery"]


def select_equipment_optimization_template(ctx: ContentContext, score: float) -> Optional[InsightTemplate]:
    limitations = ctx.profile.basicLimitations
    tier = _template_tier(score)

    if tier == "poor":
        if len(limitations.availableEquipment) < 2:
            return EQUIPMENT_OPTIMIZATION_TEMPLATES["poor"]["limited_equipment"]
        if not limitations.availableLocations:
            return EQUIPMENT_OPTIMIZATION_TEMPLATES["poor"]["space_constraints"]
        return None
    if tier == "warning":
        return EQUIPMENT_OPTIMIZATION_TEMPLATES["warning"]["equipment_variety"]
    return EQUIPMENT_OPTIMIZATION_TEMPLATES["good"]["optimal_equipment"]


INSIGHT_TEMPLATE_SELECTORS = {
    "goalAlignment": select_goal_alignment_template,
    "intensityMatch": select_intensity_match_template,
    "durationFit": select_duration_fit_template,
    "recoveryRespect": select_recovery_respect_template,
    "equipmentOptimization": select_equipment_optimization_template,
}


def select_insight_template(factor: str, ctx: ContentContext) -> Optional[InsightTemplate]:
    """Pick the library insight for one factor, or None when nothing fits."""
    selector = INSIGHT_TEMPLATE_SELECTORS.get(factor)
    score = ctx.factor_scores.get(factor)
    if selector is None or score is None:
        return None
    return selector(ctx, score)


def display_name(factor: str) -> str:
    return FACTOR_DISPLAY_NAMES.get(factor, factor)


# --- Insights ---

def generate_insights(
    overall_score: float,
    factors: FactorResults,
    library: Optional[ContentContext] = None,
) -> list[AnalysisInsight]:
    """One overall insight plus per-factor low/excellent insights, by priority.

    With a library context, each factor may also add an educational insight
    from the template library; these sort after the rule-based ones.
    """
    for floor, insight_id, kind, title, message, priority, actionable in OVERALL_INSIGHTS:
        if overall_score >= floor:
            break

    insights = [
        AnalysisInsight(
            id=insight_id,
            type=kind,
            title=title,
            message=message,
            factor="overall",
            priority=priority,
            actionable=actionable,
        )
    ]

    for name, factor in factors.items():
        if factor.score < NEEDS_ATTENTION_BELOW:
            insights.append(AnalysisInsight(
                id=f"low-{name}",
                type="suggestion",
                title=f"{display_name(name)} Needs Attention",
                message=factor.reasoning,
                factor=name,
                priority=5,
                actionable=True,
            ))
        elif factor.score >= EXCELLENT_FROM:
            insights.append(AnalysisInsight(
                id=f"excellent-{name}",
                type="positive",
                title=f"Excellent {display_name(name)}",
                message=factor.reasoning,
                factor=name,
                priority=6,
                actionable=False,
            ))

    if library is not None:
        for name, _ in factors.items():
            template = select_insight_template(name, library)
            if template is None:
                continue
            message = template.explanation
            if template.suggestion:
                message = f"{message} {template.suggestion}"
            insights.append(AnalysisInsight(
                id=f"tip-{name}",
                type="educational",
                title=template.title,
                message=message,
                factor=name,
                priority=LIBRARY_INSIGHT_PRIORITY + template.priority,
                actionable=template.suggestion is not None,
            ))

    return sorted(insights, key=lambda insight: insight.priority)


# --- Suggestions ---

def suggestion_impact(score: float) -> str:
    if score < 0.5:
        return "high"
    if score < 0.7:
        return "medium"
    return "low"


def estimate_score_increase(score: float) -> float:
    if score < 0.5:
        return 0.3
    if score < 0.7:
        return 0.2
    return 0.1


def is_quick_fix(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in QUICK_FIX_KEYWORDS)


def time_required(text: str) -> str:
    lowered = text.lower()
    if "consider" in lowered:
        return "immediate"
    if "update" in lowered:
        return "5min"
    if "complete" in lowered:
        return "15min"
    return "30min"


def suggestion_priority(score: float, factor: str) -> int:
    """Lower is more urgent: score tier first, then factor order."""
    base = 1 if score < 0.5 else 2 if score < 0.7 else 3
    return base * 10 + FACTOR_ORDER.get(factor, 5)


def generate_suggestions(
    factors: FactorResults,
    library: Optional[ContentContext] = None,
) -> list[ImprovementSuggestion]:
    suggestions = []
    counter = 1

    for name, factor in factors.items():
        for text in factor.suggestions or ():
            suggestions.append(ImprovementSuggestion(
                id=f"suggestion-{counter}",
                action=text,
                description=f"Improve {display_name(name)}",
                impact=suggestion_impact(factor.score),
                estimatedScoreIncrease=estimate_score_increase(factor.score),
                quickFix=is_quick_fix(text),
                category=SUGGESTION_CATEGORIES[name],
                timeRequired=time_required(text),
                priority=suggestion_priority(factor.score, name),
            ))
            counter += 1

    if library is not None:
        suggestions.extend(template.to_suggestion() for template in applicable_suggestions(library))

    return sorted(suggestions, key=lambda suggestion: suggestion.priority)


# --- Educational content ---

def generate_educational_content(
    factors: FactorResults,
    library: Optional[ContentContext] = None,
) -> list[EducationalContent]:
    content = [SELECTION_BASICS]

    for name, factor in factors.items():
        if factor.score < LEARN_BELOW:
            label = display_name(name)
            content.append(EducationalContent(
                id=f"learn-{name}",
                title=f"Improving {label}",
                content=f"Learn how to optimize your {label.lower()} for better workout results.",
                category=EDUCATIONAL_CATEGORIES[name],
                priority=2,
                learnMoreUrl=f"/education/{name}",
            ))

    if library is not None:
        seen = {item.id for item in content}
        extra = [
            template for template in applicable_educational_content(library, max_content=None)
            if template.id not in seen
        ]
        content.extend(template.to_content() for template in extra[:LIBRARY_CONTENT_LIMIT])

    return sorted(content, key=lambda item: item.priority)
