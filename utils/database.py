import discord
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.server_api import ServerApi

from utils import config
from utils.models import Sighting, Subject, Vehicle
from utils.utils import format_spotter_line

# newest first; _id keeps same-timestamp rows in insertion order
SIGHTING_ORDER = {"created_at": -1, "_id": -1}

class DataBase:
    def __init__(self, bot, client: AsyncIOMotorClient | None = None):
        self.bot = bot
        self.client = client or AsyncIOMotorClient(config.mongo_uri(), server_api=ServerApi("1"), tz_aware=True)
        self.db = self.client[config.MONGO_DB]
        self.sightings = self.db["sightings"]
        self.vehicles = self.db["vehicles"]
        self.bot.logger.info("Database connected")

    async def ensure_indexes(self):
        await self.sightings.create_index([("discord_guild_id", ASCENDING), ("created_at", DESCENDING)])
        await self.sightings.create_index([("discord_user_id", ASCENDING), ("created_at", DESCENDING)])
        await self.sightings.create_index([("license", ASCENDING), ("created_at", DESCENDING)])
        await self.vehicles.create_index("license", unique=True)

    def close(self):
        self.client.close()

    # ==== Sightings ====
    async def insert_sighting(self, license: str, user_id: int, guild_id: int | None = None, comment: str | None = None):
        doc = {
            "license": license,
            "comment": comment or None,
            "discord_user_id": int(user_id),
            "discord_guild_id": int(guild_id) if guild_id else None,
            "created_at": discord.utils.utcnow(),
        }
        await self.sightings.insert_one(doc)
        self.bot.logger.info(f"Sighting {license} recorded for user {user_id} (guild {guild_id})")

    async def count_sightings(self, subject: Subject) -> int:
        return int(await self.sightings.count_documents(subject.query()))

    async def fetch_sightings(self, subject: Subject, offset: int, limit: int) -> list[Sighting]:
        pipeline = [
            {"$match": subject.query()},
            {"$sort": SIGHTING_ORDER},
            {"$skip": max(0, int(offset))},
            {"$limit": max(1, int(limit))},
            {"$lookup": {"from": "vehicles", "localField": "license", "foreignField": "license", "as": "vehicle"}},
            {"$set": {"vehicle": {"$first": "$vehicle"}}},
        ]
        return [Sighting.from_doc(doc) async for doc in self.sightings.aggregate(pipeline)]

    async def spotters(self, license: str, user_id: int, guild_id: int | None = None, limit: int = 5) -> str | None:
        query = {"license": license}
        query.update({"discord_guild_id": guild_id} if guild_id else {"discord_user_id": user_id})
        cursor = self.sightings.find(query).sort(list(SIGHTING_ORDER.items())).limit(limit)
        lines = [format_spotter_line(d["discord_user_id"], d["created_at"], d.get("comment")) async for d in cursor]
        return "\n".join(lines) if lines else None

    # ==== Vehicles ====
    async def save_vehicle(self, vehicle: Vehicle) -> Vehicle:
        doc = await self.vehicles.find_one_and_update(
            {"license": vehicle.license},
            {"$set": vehicle.to_doc(), "$currentDate": {"updated_at": True}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return Vehicle.from_doc(doc) or vehicle
