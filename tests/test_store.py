import asyncio
from types import SimpleNamespace

import pytest
from bson import ObjectId

from core.errors import StoreWriteConflict
from core.store import AchievementStore, HabitStore
from models.habit import Habit


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs
        self.sort_args = None

    def sort(self, key, direction):
        self.sort_args = (key, direction)
        self.docs = sorted(self.docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return list(self.docs)


class FakeCollection:
    """Just enough of a Motor collection for the stores."""

    def __init__(self, docs=()):
        self.docs = list(docs)
        self.cursor = None
        self.update_filter = None

    def find(self, query):
        matching = [d for d in self.docs if all(d.get(k) == v for k, v in query.items())]
        self.cursor = FakeCursor(matching)
        return self.cursor

    async def update_one(self, query, update):
        self.update_filter = query
        matched = [d for d in self.docs if all(d.get(k) == v for k, v in query.items())]
        return SimpleNamespace(matched_count=len(matched))


def test_achievements_listed_in_insertion_order():
    first, second, third = ObjectId(), ObjectId(), ObjectId()
    # returned by the server in a different order than inserted
    collection = FakeCollection([
        {"_id": third, "user_id": "owner-1", "name": "Third"},
        {"_id": first, "user_id": "owner-1", "name": "First"},
        {"_id": second, "user_id": "owner-1", "name": "Second"},
        {"_id": ObjectId(), "user_id": "someone-else", "name": "Theirs"},
    ])

    achievements = asyncio.run(AchievementStore(collection).list_by_owner("owner-1"))

    assert collection.cursor.sort_args == ("_id", 1)
    assert [a.name for a in achievements] == ["First", "Second", "Third"]
    assert achievements[0].id == str(first)


def test_habit_write_is_guarded_by_version():
    habit_id = ObjectId()
    collection = FakeCollection([{"_id": habit_id, "user_id": "owner-1", "name": "Walk", "version": 3}])
    store = HabitStore(collection)

    saved = asyncio.run(store.put(Habit(_id=str(habit_id), user_id="owner-1", name="Walk", version=3)))
    assert saved.version == 4
    assert collection.update_filter == {"_id": habit_id, "version": 3}

    with pytest.raises(StoreWriteConflict):
        asyncio.run(store.put(Habit(_id=str(habit_id), user_id="owner-1", name="Walk", version=2)))


def test_malformed_ids_resolve_to_nothing():
    store = HabitStore(FakeCollection())
    assert asyncio.run(store.get("not-an-object-id")) is None
    assert asyncio.run(store.delete("not-an-object-id")) is False
