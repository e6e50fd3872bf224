from fastapi import APIRouter, Depends
from typing import List

from models.achievement import Achievement, EvaluatedAchievement
from routes.auth import get_current_owner
from core.achievements import evaluate, unlock
from core.errors import NotFound, Unauthorized
from core.store import HabitStore, AchievementStore, get_habit_store, get_achievement_store

router = APIRouter(prefix="/achievements", tags=["Achievements"])

@router.get("/", response_model=List[EvaluatedAchievement])
async def get_achievements(
    owner_id: str = Depends(get_current_owner),
    habits: HabitStore = Depends(get_habit_store),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    """Global achievements (derived from current habits) followed by the user's own."""
    return evaluate(await habits.list_by_owner(owner_id), await achievements.list_by_owner(owner_id))

@router.post("/{achievement_id}/unlock", response_model=Achievement)
async def unlock_achievement(
    achievement_id: str,
    owner_id: str = Depends(get_current_owner),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    achievement = await achievements.get(achievement_id)
    if achievement is None:
        raise NotFound("Achievement not found")
    if achievement.user_id != owner_id:
        raise Unauthorized("Achievement belongs to another user")

    unlocked = unlock(achievement)
    if unlocked is achievement:
        return achievement
    return await achievements.put(unlocked)
