"""
Pydantic models for request/response validation.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.models.selection import (
    AnalysisContext,
    QuickAnalysis,
    SelectionAnalysis,
    UserProfile,
    WorkoutSelections,
)


# --- Selection Analysis Models ---

class SelectionAnalysisRequest(BaseModel):
    """Request model for selection analysis and quick analysis."""
    profile: Optional[UserProfile] = None
    selections: Optional[WorkoutSelections] = None
    context: AnalysisContext = Field(default_factory=AnalysisContext)

    model_config = {
        "json_schema_extra": {
            "example": {
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
        }
    }


class SelectionAnalysisResponse(BaseModel):
    """API wrapper for a full analysis; analysis is null when unavailable."""
    status: Literal["success", "unavailable"]
    analysis: Optional[SelectionAnalysis] = None


class QuickAnalysisResponse(BaseModel):
    """API wrapper for the quick summary; summary is null when unavailable."""
    status: Literal["success", "unavailable"]
    summary: Optional[QuickAnalysis] = None


# --- Generic Response Models ---

class SuccessResponse(BaseModel):
    """Generic success response wrapper."""
    status: str = "success"
