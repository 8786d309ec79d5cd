from __future__ import annotations

from pydantic import BaseModel, Field

from .common import BloodType


class InventoryEntry(BaseModel):
    blood_type: BloodType
    units: int = Field(ge=0)


class InventoryUpdate(BaseModel):
    entry: InventoryEntry
    created: bool
    message: str
