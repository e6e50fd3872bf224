from motor.motor_asyncio import AsyncIOMotorClient
from core.config import settings

URI = settings.MONGO_URI

client = AsyncIOMotorClient(URI)
db = client[settings.DB_NAME]

async def init_db_indexes() -> None:
    # Owner listings
    await db.habits.create_index([("user_id", 1), ("created_at", -1)])
    await db.user_achievements.create_index([("user_id", 1)])
    # Cascade on habit delete
    await db.user_achievements.create_index([("habit_id", 1)])
