import itertools
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from core.errors import NotFound, StoreWriteConflict
from core.store import get_habit_store, get_achievement_store
from main import app
from models.achievement import Achievement
from models.habit import Habit
from routes.auth import get_current_owner

OWNER_ID = "owner-1"

class InMemoryHabitStore:
    """Same contract as HabitStore, backed by a dict."""

    def __init__(self):
        self.docs: Dict[str, Habit] = {}
        self._ids = itertools.count(1)
        self.conflicts_to_raise = 0
        self.put_calls = 0

    async def get(self, habit_id: str) -> Optional[Habit]:
        return self.docs.get(habit_id)

    async def list_by_owner(self, owner_id: str) -> List[Habit]:
        owned = [h for h in self.docs.values() if h.user_id == owner_id]
        return sorted(owned, key=lambda h: h.created_at, reverse=True)

    async def insert(self, habit: Habit) -> Habit:
        habit = habit.model_copy(update={"id": f"habit-{next(self._ids)}"})
        self.docs[habit.id] = habit
        return habit

    async def put(self, habit: Habit) -> Habit:
        self.put_calls += 1
        stored = self.docs.get(habit.id)
        if self.conflicts_to_raise:
            self.conflicts_to_raise -= 1
            raise StoreWriteConflict("simulated concurrent write")
        if stored is None or stored.version != habit.version:
            raise StoreWriteConflict("version mismatch")
        saved = habit.model_copy(update={"version": habit.version + 1})
        self.docs[habit.id] = saved
        return saved

    async def delete(self, habit_id: str) -> bool:
        return self.docs.pop(habit_id, None) is not None

class InMemoryAchievementStore:
    def __init__(self):
        self.docs: Dict[str, Achievement] = {}
        self._ids = itertools.count(1)

    async def get(self, achievement_id: str) -> Optional[Achievement]:
        return self.docs.get(achievement_id)

    async def list_by_owner(self, owner_id: str) -> List[Achievement]:
        return [a for a in self.docs.values() if a.user_id == owner_id]

    async def insert_many(self, achievements) -> List[Achievement]:
        saved = []
        for a in achievements:
            a = a.model_copy(update={"id": f"ach-{next(self._ids)}"})
            self.docs[a.id] = a
            saved.append(a)
        return saved

    async def put(self, achievement: Achievement) -> Achievement:
        if achievement.id not in self.docs:
            raise NotFound("gone")
        self.docs[achievement.id] = achievement
        return achievement

    async def delete(self, achievement_id: str) -> bool:
        return self.docs.pop(achievement_id, None) is not None

    async def delete_by_habit(self, habit_id: str) -> int:
        doomed = [k for k, a in self.docs.items() if a.habit_id == habit_id]
        for k in doomed:
            del self.docs[k]
        return len(doomed)

@pytest.fixture
def habit_store():
    return InMemoryHabitStore()

@pytest.fixture
def achievement_store():
    return InMemoryAchievementStore()

@pytest.fixture
def client(habit_store, achievement_store):
    app.dependency_overrides[get_habit_store] = lambda: habit_store
    app.dependency_overrides[get_achievement_store] = lambda: achievement_store
    app.dependency_overrides[get_current_owner] = lambda: OWNER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()
