from __future__ import annotations

from pydantic import BaseModel, Field


class MonthlyCount(BaseModel):
    year: int
    month: int = Field(ge=1, le=12)
    total: int = Field(ge=0)
