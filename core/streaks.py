from datetime import date
from typing import Optional

from core.time_utils import previous_day

def compute_next_streak(prior_streak: int, last_completed_day: Optional[date], today: date) -> int:
    """
    Calculates the streak after recording a completion for `today`.

    Args:
        prior_streak (int): The habit's streak before this completion.
        last_completed_day (date | None): Day of the previous completion.
        today (date): The day being recorded.

    Returns:
        int: prior_streak + 1 when the previous completion was yesterday,
        otherwise 1 (never completed, or a gap of two days or more).

    Raises:
        ValueError: If the habit was already completed today. The caller
        must short-circuit that case instead of counting the day twice.
    """
    if last_completed_day == today:
        raise ValueError("Habit already completed on %s" % today.isoformat())

    if last_completed_day is not None and last_completed_day == previous_day(today):
        return prior_streak + 1

    return 1
