from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from ..models.common import Status
from ..models.donation import DonationCreate
from ..models.request import BloodRequestCreate
from ..models.user import UserCreate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_id(document: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize MongoDB document for JSON compatibility."""
    if "_id" in document:
        document["_id"] = str(document["_id"])
    return document


def user_document(payload: UserCreate, hashed_password: str) -> Dict[str, Any]:
    return {
        "name": payload.name,
        "email": payload.email,
        "password": hashed_password,
        "role": payload.role,
        "blood_type": payload.blood_type.value,
        "location": payload.location.model_dump(),
        "created_at": utcnow(),
    }


def donation_document(payload: DonationCreate) -> Dict[str, Any]:
    return {
        "donor": payload.donor,
        "blood_type": payload.blood_type.value,
        "status": Status.PENDING.value,
        "created_at": utcnow(),
    }


def request_document(payload: BloodRequestCreate) -> Dict[str, Any]:
    return {
        "recipient": payload.recipient,
        "blood_type": payload.blood_type.value,
        "units": payload.units,
        "status": Status.PENDING.value,
        "created_at": utcnow(),
        "location": payload.location.model_dump(),
    }
