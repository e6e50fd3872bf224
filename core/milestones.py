from typing import List, Optional, Sequence, Tuple

from models.habit import Milestone

def current_milestone_index(milestones: Sequence[Milestone]) -> Optional[int]:
    """Index of the first incomplete milestone, or None if all are done."""
    for index, milestone in enumerate(milestones):
        if not milestone.is_completed:
            return index
    return None

def current_milestone(milestones: Sequence[Milestone]) -> Optional[Milestone]:
    index = current_milestone_index(milestones)
    return milestones[index] if index is not None else None

def advance(milestones: Sequence[Milestone]) -> List[Milestone]:
    """
    Counts one more completed day towards the current milestone.

    Returns a new list; only the current milestone is replaced. If every
    milestone is already completed the list is returned unchanged.
    """
    updated = list(milestones)
    index = current_milestone_index(updated)
    if index is None:
        return updated

    milestone = updated[index]
    updated[index] = milestone.model_copy(update={"completed_days": milestone.completed_days + 1})
    return updated

def promote_completed(milestones: Sequence[Milestone]) -> Tuple[List[Milestone], Optional[Milestone]]:
    """
    Marks the current milestone completed once it reaches its target.

    Returns:
        tuple: (updated milestones, the newly completed milestone or None)
    """
    updated = list(milestones)
    index = current_milestone_index(updated)
    if index is None:
        return updated, None

    milestone = updated[index]
    if milestone.completed_days < milestone.target_days:
        return updated, None

    completed = milestone.model_copy(update={"is_completed": True})
    updated[index] = completed
    return updated, completed

def progress(milestones: Sequence[Milestone]) -> float:
    """Percent progress on the current milestone (100 when all are done)."""
    milestone = current_milestone(milestones)
    if milestone is None:
        return 100.0
    return min(100.0, milestone.completed_days / milestone.target_days * 100)
