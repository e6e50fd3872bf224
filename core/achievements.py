from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Sequence

from core.icons import resolve_icon
from core.time_utils import get_current_time
from models.achievement import Achievement, EvaluatedAchievement
from models.habit import Habit

@dataclass(frozen=True)
class GlobalAchievement:
    id: str
    name: str
    description: str
    icon_name: str
    unlock_condition: Callable[[Sequence[Habit]], bool]

def _has_active_streak(habits: Sequence[Habit]) -> bool:
    return any(h.current_streak > 0 for h in habits)

def _has_completed_milestone(habits: Sequence[Habit]) -> bool:
    return any(m.is_completed for h in habits for m in h.milestones)

def _has_completed_goal(habits: Sequence[Habit]) -> bool:
    # A habit without milestones has no goal to complete
    return any(h.milestones and all(m.is_completed for m in h.milestones) for h in habits)

GLOBAL_ACHIEVEMENTS = (
    GlobalAchievement(
        id="habit-former",
        name="Habit Former",
        description="Complete your 1st Streak",
        icon_name="Trophy",
        unlock_condition=_has_active_streak,
    ),
    GlobalAchievement(
        id="power-of-habit",
        name="Power of Habit",
        description="Completed your 1st milestone",
        icon_name="Sparkles",
        unlock_condition=_has_completed_milestone,
    ),
    GlobalAchievement(
        id="atomic-habit",
        name="Atomic Habit",
        description="Completed your 1st Goal (all milestones for a habit)",
        icon_name="Target",
        unlock_condition=_has_completed_goal,
    ),
)

def evaluate(habits: Sequence[Habit], user_achievements: Sequence[Achievement]) -> List[EvaluatedAchievement]:
    """
    Resolves every achievement the owner can see.

    Global achievements are recomputed from `habits` on each call and come
    first in their fixed order. User achievements follow in storage order
    with their stored unlock flag.
    """
    evaluated = [
        EvaluatedAchievement(
            id=g.id,
            kind="global",
            name=g.name,
            description=g.description,
            icon_name=g.icon_name,
            is_unlocked=bool(g.unlock_condition(habits)),
        )
        for g in GLOBAL_ACHIEVEMENTS
    ]

    for a in user_achievements:
        evaluated.append(EvaluatedAchievement(
            id=str(a.id),
            kind="user",
            name=a.name,
            description=a.description,
            icon_name=resolve_icon(a.icon_name),
            is_unlocked=a.is_unlocked,
            unlocked_at=a.unlocked_at,
        ))

    return evaluated

def unlock(achievement: Achievement, now: datetime = None) -> Achievement:
    """Flips a user achievement to unlocked. Already unlocked ones are returned unchanged."""
    if achievement.is_unlocked:
        return achievement
    return achievement.model_copy(update={
        "is_unlocked": True,
        "unlocked_at": now or get_current_time(),
    })
