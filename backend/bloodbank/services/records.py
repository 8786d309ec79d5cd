from __future__ import annotations

from typing import Any, Dict, List, Union

from ..models.common import RecordKind, Status
from ..models.donation import Donation, DonationCreate
from ..models.request import BloodRequest, BloodRequestCreate
from ..schemas.documents import donation_document, request_document, serialize_id
from ..store import MongoStore

Record = Union[Donation, BloodRequest]


def to_record(kind: RecordKind, document: Dict[str, Any]) -> Record:
    model = Donation if kind is RecordKind.DONATION else BloodRequest
    return model(**serialize_id(document))


async def submit_donation(store: MongoStore, payload: DonationCreate) -> Donation:
    stored = await store.insert_record(RecordKind.DONATION, donation_document(payload))
    return Donation(**serialize_id(stored))


async def submit_request(store: MongoStore, payload: BloodRequestCreate) -> BloodRequest:
    stored = await store.insert_record(RecordKind.REQUEST, request_document(payload))
    return BloodRequest(**serialize_id(stored))


async def list_pending(store: MongoStore, kind: RecordKind) -> List[Record]:
    return [to_record(kind, doc) for doc in await store.list_records(kind, Status.PENDING)]
