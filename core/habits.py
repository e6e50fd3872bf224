import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from core.milestones import advance, promote_completed, current_milestone_index
from core.streaks import compute_next_streak
from core.time_utils import day_of, get_current_time
from models.habit import Habit, Milestone, MilestoneIn

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class CompletionResult:
    habit: Habit
    already_completed_today: bool = False
    newly_completed_milestone: Optional[Milestone] = None

    @property
    def all_milestones_completed(self) -> bool:
        return bool(self.habit.milestones) and current_milestone_index(self.habit.milestones) is None

def new_habit(owner_id: str, name: str, milestones: Iterable[MilestoneIn] = ()) -> Habit:
    """Seeds a fresh habit: no streak, no completions, milestone progress at zero."""
    return Habit(
        user_id=owner_id,
        name=name,
        current_streak=0,
        last_completed_date=None,
        milestones=[Milestone(goal=m.goal, target_days=m.target_days) for m in milestones],
        created_at=get_current_time(),
    )

def record_completion(habit: Habit, today: date) -> CompletionResult:
    """
    Records the habit as done on `today` (The Core Progression Logic).

    1. Same-day gate: a habit already completed today is returned as-is.
    2. Streak continues from yesterday or restarts at 1.
    3. Current milestone gains a day, then completes if it hit its target.

    The input habit is left untouched; the caller persists the returned copy
    in a single write.
    """
    if day_of(habit.last_completed_date) == today:
        return CompletionResult(habit=habit, already_completed_today=True)

    new_streak = compute_next_streak(habit.current_streak, day_of(habit.last_completed_date), today)

    milestones, newly_completed = promote_completed(advance(habit.milestones))

    updated = habit.model_copy(update={
        "current_streak": new_streak,
        "last_completed_date": today,
        "milestones": milestones,
    })

    if newly_completed is not None:
        logger.info("Habit %s: milestone '%s' completed", habit.id, newly_completed.goal)

    return CompletionResult(habit=updated, newly_completed_milestone=newly_completed)
