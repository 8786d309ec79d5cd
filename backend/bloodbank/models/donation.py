from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .common import BloodType, Status


class DonationCreate(BaseModel):
    donor: EmailStr
    blood_type: BloodType


class Donation(BaseModel):
    id: str = Field(alias="_id")
    donor: str
    blood_type: BloodType
    status: Status
    created_at: datetime
