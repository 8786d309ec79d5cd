from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .common import BloodType, Location, Status


class BloodRequestCreate(BaseModel):
    recipient: EmailStr
    blood_type: BloodType
    units: int = Field(gt=0)
    location: Location


class BloodRequest(BaseModel):
    id: str = Field(alias="_id")
    recipient: str
    blood_type: BloodType
    units: int
    status: Status
    created_at: datetime
    location: Location
