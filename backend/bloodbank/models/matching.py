from __future__ import annotations

from pydantic import BaseModel


class DonorMatch(BaseModel):
    name: str
    email: str
    city: str | None = None
    distance_km: float | None = None
