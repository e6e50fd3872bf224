from pydantic import BaseModel, Field, AliasChoices
from typing import List

class SuggestionRequest(BaseModel):
    end_goal: str = Field(..., min_length=1, max_length=200)

class SuggestedMilestone(BaseModel):
    goal: str = Field(..., min_length=1)
    target_days: int = Field(..., ge=1, validation_alias=AliasChoices("target_days", "targetDays"))

class SuggestedAchievement(BaseModel):
    name: str = Field(..., min_length=1)
    description: str
    icon_name: str = Field(..., validation_alias=AliasChoices("icon_name", "lucide_icon_name", "iconName"))

class Suggestion(BaseModel):
    milestones: List[SuggestedMilestone]
    achievements: List[SuggestedAchievement]
