import logging
from dataclasses import replace
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from typing import List

from models.habit import Habit, HabitCreate, CompletionResponse
from models.achievement import Achievement
from models.suggestion import Suggestion, SuggestionRequest
from routes.auth import get_current_owner
from core.config import settings
from core.errors import NotFound, Unauthorized, StoreWriteConflict
from core.habits import new_habit, record_completion
from core.icons import resolve_icon
from core.milestones import current_milestone, progress
from core.store import HabitStore, AchievementStore, get_habit_store, get_achievement_store
from core.suggestions import suggest
from core.time_utils import today

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/habits", tags=["Habits"])

async def get_owned_habit(habit_id: str, owner_id: str, habits: HabitStore) -> Habit:
    habit = await habits.get(habit_id)
    if habit is None:
        raise NotFound("Habit not found")
    if habit.user_id != owner_id:
        raise Unauthorized("Habit belongs to another user")
    return habit

@router.post("/suggestions", response_model=Suggestion)
async def suggest_milestones(request: SuggestionRequest, owner_id: str = Depends(get_current_owner)):
    """Ask the AI service for milestones and achievements to seed a new habit."""
    return await run_in_threadpool(suggest, request.end_goal)

@router.post("/", response_model=Habit)
async def create_habit(
    habit_in: HabitCreate,
    owner_id: str = Depends(get_current_owner),
    habits: HabitStore = Depends(get_habit_store),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    habit = await habits.insert(new_habit(owner_id, habit_in.name, habit_in.milestones))

    try:
        await achievements.insert_many([
            Achievement(
                user_id=owner_id,
                habit_id=habit.id,
                name=a.name,
                description=a.description,
                icon_name=resolve_icon(a.icon_name),
            )
            for a in habit_in.achievements
        ])
    except Exception:
        # A habit is only visible together with its achievements
        logger.exception("Saving achievements for habit %s failed, removing the habit", habit.id)
        await habits.delete(habit.id)
        raise
    logger.info("Habit %s created for %s with %d milestones", habit.id, owner_id, len(habit.milestones))
    return habit

@router.get("/", response_model=List[Habit])
async def get_habits(owner_id: str = Depends(get_current_owner), habits: HabitStore = Depends(get_habit_store)):
    return await habits.list_by_owner(owner_id)

@router.get("/{habit_id}", response_model=Habit)
async def get_habit(habit_id: str, owner_id: str = Depends(get_current_owner), habits: HabitStore = Depends(get_habit_store)):
    return await get_owned_habit(habit_id, owner_id, habits)

@router.delete("/{habit_id}")
async def delete_habit(
    habit_id: str,
    owner_id: str = Depends(get_current_owner),
    habits: HabitStore = Depends(get_habit_store),
    achievements: AchievementStore = Depends(get_achievement_store),
):
    await get_owned_habit(habit_id, owner_id, habits)
    if not await habits.delete(habit_id):
        raise NotFound("Habit not found")
    removed = await achievements.delete_by_habit(habit_id)
    return {"message": "Habit deleted", "achievements_deleted": removed}

@router.post("/{habit_id}/complete", response_model=CompletionResponse)
async def complete_habit(habit_id: str, owner_id: str = Depends(get_current_owner), habits: HabitStore = Depends(get_habit_store)):
    """
    Mark a habit completed for today.

    Marking twice on the same day is a no-op that reports
    `already_completed_today`. When another request updates the habit
    between our read and write, the habit is re-read and the completion
    recomputed, up to COMPLETION_MAX_RETRIES times.

    Returns:
        dict: {
            "habit": Updated Habit Object,
            "already_completed_today": bool,
            "milestone_completed": bool (True if this completion finished a milestone),
            "milestone_goal": str (Goal of that milestone),
            "all_milestones_completed": bool,
            "current_milestone": Milestone now in progress (None when all are done),
            "progress": float (Percent towards current_milestone)
        }
    """
    attempts = max(1, settings.COMPLETION_MAX_RETRIES)
    for attempt in range(1, attempts + 1):
        habit = await get_owned_habit(habit_id, owner_id, habits)
        result = record_completion(habit, today())

        if result.already_completed_today:
            break

        try:
            saved = await habits.put(result.habit)
        except StoreWriteConflict:
            if attempt == attempts:
                raise
            logger.info("Retrying completion of habit %s (attempt %d of %d)", habit_id, attempt + 1, attempts)
            continue

        result = replace(result, habit=saved)
        logger.info("Habit %s completed, streak now %d", habit_id, saved.current_streak)
        break

    milestone = result.newly_completed_milestone
    return CompletionResponse(
        habit=result.habit,
        already_completed_today=result.already_completed_today,
        milestone_completed=milestone is not None,
        milestone_goal=milestone.goal if milestone else None,
        all_milestones_completed=result.all_milestones_completed,
        current_milestone=current_milestone(result.habit.milestones),
        progress=progress(result.habit.milestones),
    )
