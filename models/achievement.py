from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime
from models.common import PyObjectId
from core.time_utils import get_current_time

class Achievement(BaseModel):
    """A user-defined achievement, generated alongside a habit and persisted."""
    id: Optional[PyObjectId] = Field(alias="_id", default=None)
    user_id: str
    habit_id: Optional[str] = None # Back-reference only; deleting the habit deletes these
    name: str
    description: str = ""
    icon_name: str = "Award"
    is_unlocked: bool = False
    unlocked_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=get_current_time)

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

class EvaluatedAchievement(BaseModel):
    id: str
    kind: Literal["global", "user"]
    name: str
    description: str
    icon_name: str
    is_unlocked: bool = False
    unlocked_at: Optional[datetime] = None
