"""
Pytest fixtures for the Selection Analysis Microservice tests.
"""
import pytest
from fastapi.testclient import TestClient

# Set environment variables before importing app
import os
os.environ.setdefault("INTERNAL_API_SECRET", "test-internal-secret")
os.environ.setdefault("ANALYSIS_RATE_LIMIT", "1000/minute")
os.environ.setdefault("CONFIG_RATE_LIMIT", "1000/minute")

from app.main import app
from app.models.selection import AnalysisContext, UserProfile, WorkoutSelections


INTERNAL_HEADERS = {"X-Internal-Secret": os.environ["INTERNAL_API_SECRET"]}


@pytest.fixture
def client():
    """Create a test client for the FastAPI app with the internal secret header."""
    return TestClient(app, headers=INTERNAL_HEADERS)


@pytest.fixture
def anonymous_client():
    """Test client that sends no internal secret."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def fresh_selection_service():
    """Give every test an empty cache and the startup config."""
    app.state.selection_service.reset()
    yield
    app.state.selection_service.reset()


@pytest.fixture
def beginner_profile():
    """New exerciser with no goals, injuries or equipment."""
    return UserProfile(fitnessLevel="beginner")


@pytest.fixture
def long_strength_selections():
    """60 minute strength session at top energy."""
    return WorkoutSelections(focus="strength", energy=5, duration=60)


@pytest.fixture
def sample_profile():
    """Typical intermediate profile with goals and some equipment."""
    return UserProfile(
        fitnessLevel="some experience",
        goals=["weight loss", "strength building"],
        preferences={"workoutStyle": ["strength training"], "intensityPreference": "moderate"},
        basicLimitations={
            "injuries": [],
            "availableEquipment": ["dumbbells", "resistance bands", "yoga mat"],
            "availableLocations": ["home"],
        },
        age=34,
        workoutHistory={"estimatedCompletedWorkouts": 40, "averageDuration": 40},
    )


@pytest.fixture
def sample_selections():
    """Moderate 45 minute strength session with dumbbells."""
    return WorkoutSelections(
        focus="strength training",
        duration=45,
        energy=3,
        sleep=4,
        equipment=["dumbbells"],
    )


@pytest.fixture
def default_context():
    return AnalysisContext()


@pytest.fixture
def sample_analysis_request():
    """Sample request body for /analyze-selections and /quick-analysis."""
    return {
        "profile": {
            "fitnessLevel": "some experience",
            "goals": ["weight loss", "strength building"],
            "basicLimitations": {
                "injuries": [],
                "availableEquipment": ["dumbbells", "resistance bands", "yoga mat"]
            },
            "age": 34
        },
        "selections": {
            "focus": "strength training",
            "duration": 45,
            "energy": 4,
            "equipment": ["dumbbells"]
        },
        "context": {
            "generationType": "detailed",
            "userExperience": "intermediate",
            "previousWorkouts": 2,
            "timeOfDay": "morning"
        }
    }
