from __future__ import annotations

from typing import List

from fastapi import APIRouter

from ..models.inventory import InventoryEntry, InventoryUpdate
from ..services.inventory import list_inventory, set_inventory
from .deps import StoreDep

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=List[InventoryEntry])
async def read_inventory(store: StoreDep) -> List[InventoryEntry]:
    return await list_inventory(store)


@router.post("", response_model=InventoryUpdate)
async def write_inventory(payload: InventoryEntry, store: StoreDep) -> InventoryUpdate:
    return await set_inventory(store, payload.blood_type, payload.units)
