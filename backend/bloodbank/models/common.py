from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator


class BloodType(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


ABO_GROUPS = {"A", "B", "AB", "O"}


def parse_blood_type(raw: str | None) -> BloodType | None:
    """Read a blood type from free text, or return None when it is not one.

    A query string such as ``?type=A+`` arrives URL-decoded as ``"A "``, so a
    bare ABO group followed by whitespace is read as Rh positive.
    """
    if not raw:
        return None
    value = raw.strip().upper()
    if value in ABO_GROUPS and raw != raw.rstrip():
        value += "+"
    try:
        return BloodType(value)
    except ValueError:
        return None


class Status(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


TERMINAL_STATUSES = frozenset({Status.APPROVED, Status.REJECTED})


class RecordKind(str, Enum):
    DONATION = "donation"
    REQUEST = "request"

    @property
    def collection(self) -> str:
        return "donations" if self is RecordKind.DONATION else "requests"

    @property
    def owner_field(self) -> str:
        # e-mail of the user the record belongs to
        return "donor" if self is RecordKind.DONATION else "recipient"


UserRole = Literal["donor", "recipient", "admin"]


class Location(BaseModel):
    type: Literal["Point"] = "Point"
    # GeoJSON order: [longitude, latitude]
    coordinates: List[float] = Field(min_length=2, max_length=2)
    city: str = Field(min_length=1)

    @field_validator("coordinates")
    @classmethod
    def check_ranges(cls, value: List[float]) -> List[float]:
        lng, lat = value
        if not -180 <= lng <= 180:
            raise ValueError("longitude must be between -180 and 180")
        if not -90 <= lat <= 90:
            raise ValueError("latitude must be between -90 and 90")
        return value


class GeoQuery(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    @classmethod
    def from_query(cls, lat: str | None, lng: str | None) -> GeoQuery | None:
        """Point from raw query values, or None when either is blank or unreadable."""
        if not lat or not lng:
            return None
        try:
            return cls(lat=lat.strip(), lng=lng.strip())
        except ValidationError:
            return None

    def to_geojson(self) -> Dict[str, Any]:
        return {"type": "Point", "coordinates": [self.lng, self.lat]}
