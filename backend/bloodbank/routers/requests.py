from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from ..models.common import GeoQuery, RecordKind
from ..models.matching import DonorMatch
from ..models.request import BloodRequest, BloodRequestCreate
from ..services.matching import find_nearby_donors
from ..services.records import list_pending, submit_request
from .deps import NotifierDep, StoreDep, apply_transition

router = APIRouter(prefix="/api", tags=["requests"])


@router.post("/request", response_model=BloodRequest, status_code=status.HTTP_201_CREATED)
async def create_request(payload: BloodRequestCreate, store: StoreDep) -> BloodRequest:
    return await submit_request(store, payload)


@router.get("/match-donors", response_model=List[DonorMatch])
async def match_donors(
    store: StoreDep,
    # blank or unreadable coordinates mean "no point" and yield an empty list
    lat: str | None = Query(None),
    lng: str | None = Query(None),
    blood_type: str | None = Query(None, alias="type"),
    radius: float | None = Query(None, gt=0),
) -> List[DonorMatch]:
    point = GeoQuery.from_query(lat, lng)
    return await find_nearby_donors(store, point, blood_type, radius)


@router.get("/requests/pending", response_model=List[BloodRequest])
async def pending_requests(store: StoreDep) -> List[BloodRequest]:
    return await list_pending(store, RecordKind.REQUEST)


@router.post("/request/{request_id}/{new_status}", response_model=BloodRequest)
async def update_request_status(
    request_id: str, new_status: str, store: StoreDep, notifier: NotifierDep
) -> BloodRequest:
    return await apply_transition(store, notifier, RecordKind.REQUEST, request_id, new_status)
