from __future__ import annotations

from typing import List

from fastapi import APIRouter

from ..models.analytics import MonthlyCount
from ..models.common import RecordKind
from ..services.analytics import monthly_counts
from .deps import StoreDep

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/donations", response_model=List[MonthlyCount])
async def donations_per_month(store: StoreDep) -> List[MonthlyCount]:
    return await monthly_counts(store, RecordKind.DONATION)


@router.get("/requests", response_model=List[MonthlyCount])
async def requests_per_month(store: StoreDep) -> List[MonthlyCount]:
    return await monthly_counts(store, RecordKind.REQUEST)
