from pydantic import BaseModel, Field, field_serializer, field_validator
from typing import Optional, List
from datetime import date, datetime
from models.common import PyObjectId
from core.time_utils import get_current_time, day_of

class Milestone(BaseModel):
    goal: str
    target_days: int = Field(..., ge=1)
    completed_days: int = Field(0, ge=0)
    is_completed: bool = False

class MilestoneIn(BaseModel):
    goal: str = Field(..., min_length=1)
    target_days: int = Field(..., ge=1)

class Habit(BaseModel):
    """
    Represents a Habit in the system.

    Attributes:
    - name: The end goal, e.g. "Walk 7000 steps a day".
    - current_streak: Consecutive calendar days the habit was marked completed.
    - last_completed_date: Calendar day of the last completion (None if never).
    - milestones: Ordered sub-goals. The current one is the first incomplete entry.
    - version: Bumped on every write; guards concurrent completions.
    """
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    user_id: Optional[str] = None
    name: str = Field(..., max_length=200)

    # Streak Tracking
    current_streak: int = Field(0, ge=0)
    last_completed_date: Optional[date] = None

    milestones: List[Milestone] = []
    created_at: datetime = Field(default_factory=get_current_time)
    version: int = Field(0, ge=0)

    @field_validator("last_completed_date", mode="before")
    @classmethod
    def normalize_day(cls, value):
        # Older documents hold a full timestamp
        return day_of(value)

    @field_serializer("last_completed_date")
    def serialize_day(self, day: Optional[date], _info):
        # BSON has no date-only type
        if day is None: return None
        return day.isoformat()

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

class AchievementIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    icon_name: str = "Award"

class HabitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    milestones: List[MilestoneIn] = []
    achievements: List[AchievementIn] = []

class CompletionResponse(BaseModel):
    habit: Habit
    already_completed_today: bool = False
    milestone_completed: bool = False
    milestone_goal: Optional[str] = None
    all_milestones_completed: bool = False
    current_milestone: Optional[Milestone] = None # First incomplete milestone after this completion
    progress: float = 0.0 # Percent towards current_milestone (100 when all are done)
