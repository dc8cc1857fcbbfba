# dev2050/modules/learning_path/schemas.py

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

class LearningStepResponse(BaseModel):
    id: UUID
    title: str
    description: str
    order: int
    resources: List[str] = []
    estimated_hours: int

    class Config:
        from_attributes = True

class LearningPathResponse(BaseModel):
    id: UUID
    title: str
    description: str
    skill: str
    icon: Optional[str] = None
    difficulty: str
    duration: Optional[str] = None
    steps: List[LearningStepResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    JUNIOR = "junior"
    INTERMEDIATE = "intermediate"
    SENIOR = "senior"
    EXPERT = "expert"

class LearningStyle(str, Enum):
    PROJECT_BASED = "project-based"
    TUTORIAL_BASED = "tutorial-based"
    DOCUMENTATION_BASED = "documentation-based"
    MIXED = "mixed"

class UserProfile(BaseModel):
    skill_level: SkillLevel
    target_role: str = Field(..., min_length=1)
    hours_per_week: int = Field(..., gt=0, le=80)
    learning_style: LearningStyle
    current_skills: List[str] = []

class PlanStep(BaseModel):
    title: str
    description: str = ""
    estimated_hours: int = Field(0, ge=0)
    resources: List[str] = []

class PlanSource(str, Enum):
    AI = "ai"
    CATALOG = "catalog"

class PersonalizedLearningPlan(BaseModel):
    title: str
    description: str
    target_role: str
    source: PlanSource
    skill: Optional[str] = None  # catalog skill the plan was derived from
    total_hours: int
    estimated_weeks: int
    steps: List[PlanStep]
