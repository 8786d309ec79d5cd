from __future__ import annotations

from typing import List

from ..models.analytics import MonthlyCount
from ..models.common import RecordKind
from ..store import MongoStore


async def monthly_counts(store: MongoStore, kind: RecordKind) -> List[MonthlyCount]:
    rows = await store.monthly_counts(kind)
    counts = [MonthlyCount(**row) for row in rows]
    # the pipeline sorts already; keep the order guaranteed for any store
    return sorted(counts, key=lambda row: (row.year, row.month))
