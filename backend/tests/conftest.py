from __future__ import annotations

import copy
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest
from bson import ObjectId
from bson.errors import InvalidId
from fastapi.testclient import TestClient

from bloodbank.main import app
from bloodbank.models.common import GeoQuery, RecordKind, Status
from bloodbank.store import get_store
from bloodbank.utils.geo import haversine_km
from bloodbank.utils.notifications import EmailNotification, get_notifier
from bloodbank.utils.security import hash_password

MUMBAI = (19.0760, 72.8777)
BANDRA = (19.0596, 72.8295)
THANE = (19.2183, 72.9781)
PUNE = (18.5204, 73.8567)


def _oid(record_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


class InMemoryStore:
    """Stand-in for MongoStore backed by plain lists."""

    def __init__(self) -> None:
        self.users: List[Dict[str, Any]] = []
        self.inventory: List[Dict[str, Any]] = []
        self.records: Dict[RecordKind, List[Dict[str, Any]]] = {kind: [] for kind in RecordKind}

    # seeding helpers for tests

    def add_user(
        self,
        email: str,
        *,
        name: str = "Test User",
        role: str = "donor",
        blood_type: str = "O-",
        at: Tuple[float, float] = MUMBAI,
        city: str = "Mumbai",
        password: str = "secret",
    ) -> Dict[str, Any]:
        lat, lng = at
        document = {
            "_id": ObjectId(),
            "name": name,
            "email": email,
            "password": hash_password(password),
            "role": role,
            "blood_type": blood_type,
            "location": {"type": "Point", "coordinates": [lng, lat], "city": city},
            "created_at": datetime.now(timezone.utc),
        }
        self.users.append(document)
        return document

    def add_record(self, kind: RecordKind, **fields: Any) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "_id": ObjectId(),
            "blood_type": "O-",
            "status": Status.PENDING.value,
            "created_at": datetime.now(timezone.utc),
        }
        if kind is RecordKind.DONATION:
            document["donor"] = "donor@example.com"
        else:
            document.update(
                recipient="recipient@example.com",
                units=2,
                location={"type": "Point", "coordinates": [MUMBAI[1], MUMBAI[0]], "city": "Mumbai"},
            )
        document.update(fields)
        self.records[kind].append(document)
        return document

    # MongoStore interface

    async def ensure_indexes(self) -> None:
        return None

    async def find_user(self, email: str) -> Optional[Dict[str, Any]]:
        for user in self.users:
            if user["email"] == email:
                return copy.deepcopy(user)
        return None

    async def insert_user(self, document: Dict[str, Any]) -> Dict[str, Any]:
        stored = {**copy.deepcopy(document), "_id": ObjectId()}
        self.users.append(stored)
        return copy.deepcopy(stored)

    async def find_donors_near(
        self, point: GeoQuery, blood_type: str, max_distance: float
    ) -> List[Dict[str, Any]]:
        hits = []
        for user in self.users:
            if user.get("role") != "donor" or user.get("blood_type") != blood_type:
                continue
            user_lng, user_lat = user["location"]["coordinates"]
            distance = haversine_km(point.lat, point.lng, user_lat, user_lng) * 1000
            if distance <= max_distance:
                hits.append((distance, user))
        hits.sort(key=lambda hit: hit[0])
        return [
            {"_id": user["_id"], "name": user["name"], "email": user["email"], "location": copy.deepcopy(user["location"])}
            for _, user in hits
        ]

    async def list_inventory(self) -> List[Dict[str, Any]]:
        return sorted(copy.deepcopy(self.inventory), key=lambda doc: doc["blood_type"])

    async def upsert_inventory(self, blood_type: str, units: int) -> Tuple[Dict[str, Any], bool]:
        for entry in self.inventory:
            if entry["blood_type"] == blood_type:
                entry["units"] = units
                return copy.deepcopy(entry), False
        entry = {"_id": ObjectId(), "blood_type": blood_type, "units": units}
        self.inventory.append(entry)
        return copy.deepcopy(entry), True

    async def count_inventory(self) -> int:
        return len(self.inventory)

    async def insert_inventory(self, documents: List[Dict[str, Any]]) -> None:
        for document in documents:
            self.inventory.append({**document, "_id": ObjectId()})

    async def insert_record(self, kind: RecordKind, document: Dict[str, Any]) -> Dict[str, Any]:
        stored = {**copy.deepcopy(document), "_id": ObjectId()}
        self.records[kind].append(stored)
        return copy.deepcopy(stored)

    async def find_record(self, kind: RecordKind, record_id: str) -> Optional[Dict[str, Any]]:
        object_id = _oid(record_id)
        for record in self.records[kind]:
            if record["_id"] == object_id:
                return copy.deepcopy(record)
        return None

    async def list_records(self, kind: RecordKind, status: Status) -> List[Dict[str, Any]]:
        matching = [record for record in self.records[kind] if record["status"] == status.value]
        return copy.deepcopy(sorted(matching, key=lambda record: record["created_at"]))

    async def transition_record(
        self, kind: RecordKind, record_id: str, new_status: Status
    ) -> Optional[Dict[str, Any]]:
        object_id = _oid(record_id)
        for record in self.records[kind]:
            if record["_id"] == object_id and record["status"] == Status.PENDING.value:
                record["status"] = new_status.value
                return copy.deepcopy(record)
        return None

    async def monthly_counts(self, kind: RecordKind) -> List[Dict[str, Any]]:
        counter = Counter(
            (record["created_at"].year, record["created_at"].month) for record in self.records[kind]
        )
        return [
            {"year": year, "month": month, "total": total}
            for (year, month), total in sorted(counter.items())
        ]


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: List[EmailNotification] = []

    def dispatch(self, message: EmailNotification) -> None:
        self.sent.append(message)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def client(store: InMemoryStore, notifier: RecordingNotifier):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
