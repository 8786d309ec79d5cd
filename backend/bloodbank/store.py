from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, GEOSPHERE, ReturnDocument
from pymongo.errors import PyMongoError

from .database import db
from .models.common import GeoQuery, RecordKind, Status

USERS = "users"
INVENTORY = "inventories"


def _object_id(record_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


def monthly_pipeline() -> List[Dict[str, Any]]:
    return [
        {
            "$group": {
                "_id": {"year": {"$year": "$created_at"}, "month": {"$month": "$created_at"}},
                "total": {"$sum": 1},
            }
        },
        {"$sort": {"_id.year": 1, "_id.month": 1}},
        {"$project": {"_id": 0, "year": "$_id.year", "month": "$_id.month", "total": 1}},
    ]


class MongoStore:
    """Document access for users, inventory, donations and requests."""

    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self.database = database

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.database.get_collection(USERS)

    @property
    def inventory(self) -> AsyncIOMotorCollection:
        return self.database.get_collection(INVENTORY)

    def records(self, kind: RecordKind) -> AsyncIOMotorCollection:
        return self.database.get_collection(kind.collection)

    async def ensure_indexes(self) -> None:
        indexes = [
            (self.users, [("location", GEOSPHERE)], {}),
            (self.users, [("email", ASCENDING)], {"unique": True}),
            (self.inventory, [("blood_type", ASCENDING)], {"unique": True}),
        ]
        for collection, keys, options in indexes:
            try:
                await collection.create_index(keys, **options)
            except PyMongoError as exc:
                # e.g. duplicate e-mails already stored block the unique index
                logger.warning("Could not create index {} on {}: {}", keys, collection.name, exc)

    # users

    async def find_user(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.users.find_one({"email": email})

    async def insert_user(self, document: Dict[str, Any]) -> Dict[str, Any]:
        result = await self.users.insert_one(document)
        return await self.users.find_one({"_id": result.inserted_id})

    async def find_donors_near(
        self, point: GeoQuery, blood_type: str, max_distance: float
    ) -> List[Dict[str, Any]]:
        query = {
            "role": "donor",
            "blood_type": blood_type,
            "location": {
                "$near": {
                    "$geometry": point.to_geojson(),
                    "$maxDistance": max_distance,
                }
            },
        }
        projection = {"name": 1, "email": 1, "location": 1}
        cursor = self.users.find(query, projection)
        return [doc async for doc in cursor]

    # inventory

    async def list_inventory(self) -> List[Dict[str, Any]]:
        cursor = self.inventory.find({}).sort("blood_type", ASCENDING)
        return [doc async for doc in cursor]

    async def upsert_inventory(self, blood_type: str, units: int) -> Tuple[Dict[str, Any], bool]:
        result = await self.inventory.update_one(
            {"blood_type": blood_type},
            {"$set": {"units": units}},
            upsert=True,
        )
        stored = await self.inventory.find_one({"blood_type": blood_type})
        return stored, result.upserted_id is not None

    async def count_inventory(self) -> int:
        return await self.inventory.count_documents({})

    async def insert_inventory(self, documents: List[Dict[str, Any]]) -> None:
        await self.inventory.insert_many(documents)

    # donations and requests

    async def insert_record(self, kind: RecordKind, document: Dict[str, Any]) -> Dict[str, Any]:
        collection = self.records(kind)
        result = await collection.insert_one(document)
        return await collection.find_one({"_id": result.inserted_id})

    async def find_record(self, kind: RecordKind, record_id: str) -> Optional[Dict[str, Any]]:
        object_id = _object_id(record_id)
        if object_id is None:
            return None
        return await self.records(kind).find_one({"_id": object_id})

    async def list_records(self, kind: RecordKind, status: Status) -> List[Dict[str, Any]]:
        cursor = self.records(kind).find({"status": status.value}).sort("created_at", ASCENDING)
        return [doc async for doc in cursor]

    async def transition_record(
        self, kind: RecordKind, record_id: str, new_status: Status
    ) -> Optional[Dict[str, Any]]:
        """Move a pending record to ``new_status``; None when nothing was pending under that id."""
        object_id = _object_id(record_id)
        if object_id is None:
            return None
        return await self.records(kind).find_one_and_update(
            {"_id": object_id, "status": Status.PENDING.value},
            {"$set": {"status": new_status.value}},
            return_document=ReturnDocument.AFTER,
        )

    async def monthly_counts(self, kind: RecordKind) -> List[Dict[str, Any]]:
        cursor = self.records(kind).aggregate(monthly_pipeline())
        return [doc async for doc in cursor]


async def get_database() -> AsyncIOMotorDatabase:
    return db


async def get_store(database: AsyncIOMotorDatabase = Depends(get_database)) -> MongoStore:
    return MongoStore(database)
