from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from ..models.common import RecordKind
from ..models.donation import Donation, DonationCreate
from ..services.records import list_pending, submit_donation
from .deps import NotifierDep, StoreDep, apply_transition

router = APIRouter(prefix="/api", tags=["donations"])


@router.post("/donate", response_model=Donation, status_code=status.HTTP_201_CREATED)
async def create_donation(payload: DonationCreate, store: StoreDep) -> Donation:
    return await submit_donation(store, payload)


@router.get("/donations/pending", response_model=List[Donation])
async def pending_donations(store: StoreDep) -> List[Donation]:
    return await list_pending(store, RecordKind.DONATION)


@router.post("/donate/{donation_id}/{new_status}", response_model=Donation)
async def update_donation_status(
    donation_id: str, new_status: str, store: StoreDep, notifier: NotifierDep
) -> Donation:
    return await apply_transition(store, notifier, RecordKind.DONATION, donation_id, new_status)
