"""
Persistence for habits and user achievements on MongoDB (Motor).

Every habit write is conditional on the `version` the caller read, so two
completions racing on the same habit cannot both land: the loser gets
StoreWriteConflict and must re-fetch.
"""
import logging
from typing import List, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId

from core.database import db
from core.errors import NotFound, StoreWriteConflict
from models.achievement import Achievement
from models.habit import Habit

logger = logging.getLogger(__name__)

def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None

class HabitStore:
    def __init__(self, collection):
        self.collection = collection

    async def get(self, habit_id: str) -> Optional[Habit]:
        oid = _object_id(habit_id)
        if oid is None:
            return None
        habit_data = await self.collection.find_one({"_id": oid})
        return Habit(**habit_data) if habit_data else None

    async def list_by_owner(self, owner_id: str) -> List[Habit]:
        cursor = self.collection.find({"user_id": owner_id}).sort("created_at", -1)
        habits = await cursor.to_list(length=None)
        return [Habit(**h) for h in habits]

    async def insert(self, habit: Habit) -> Habit:
        habit_dump = habit.model_dump(by_alias=True, exclude={"id"})
        result = await self.collection.insert_one(habit_dump)
        return habit.model_copy(update={"id": str(result.inserted_id)})

    async def put(self, habit: Habit) -> Habit:
        """Writes the whole habit if nobody else wrote since `habit.version` was read."""
        habit_dump = habit.model_dump(by_alias=True, exclude={"id", "version", "created_at", "user_id"})
        result = await self.collection.update_one(
            {"_id": ObjectId(habit.id), "version": habit.version},
            {"$set": habit_dump, "$inc": {"version": 1}},
        )
        if result.matched_count == 0:
            logger.warning("Version conflict writing habit %s (version %s)", habit.id, habit.version)
            raise StoreWriteConflict("Habit %s was modified concurrently" % habit.id)
        return habit.model_copy(update={"version": habit.version + 1})

    async def delete(self, habit_id: str) -> bool:
        oid = _object_id(habit_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

class AchievementStore:
    def __init__(self, collection):
        self.collection = collection

    async def get(self, achievement_id: str) -> Optional[Achievement]:
        oid = _object_id(achievement_id)
        if oid is None:
            return None
        data = await self.collection.find_one({"_id": oid})
        return Achievement(**data) if data else None

    async def list_by_owner(self, owner_id: str) -> List[Achievement]:
        # ObjectIds grow with insertion time, so this is storage order
        cursor = self.collection.find({"user_id": owner_id}).sort("_id", 1)
        achievements = await cursor.to_list(length=None)
        return [Achievement(**a) for a in achievements]

    async def insert_many(self, achievements: Sequence[Achievement]) -> List[Achievement]:
        if not achievements:
            return []
        docs = [a.model_dump(by_alias=True, exclude={"id"}) for a in achievements]
        result = await self.collection.insert_many(docs)
        return [a.model_copy(update={"id": str(oid)}) for a, oid in zip(achievements, result.inserted_ids)]

    async def put(self, achievement: Achievement) -> Achievement:
        achievement_dump = achievement.model_dump(by_alias=True, exclude={"id"})
        result = await self.collection.update_one({"_id": ObjectId(achievement.id)}, {"$set": achievement_dump})
        if result.matched_count == 0:
            raise NotFound("Achievement %s no longer exists" % achievement.id)
        return achievement

    async def delete(self, achievement_id: str) -> bool:
        oid = _object_id(achievement_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def delete_by_habit(self, habit_id: str) -> int:
        result = await self.collection.delete_many({"habit_id": habit_id})
        return result.deleted_count

def get_habit_store() -> HabitStore:
    return HabitStore(db.habits)

def get_achievement_store() -> AchievementStore:
    return AchievementStore(db.user_achievements)
