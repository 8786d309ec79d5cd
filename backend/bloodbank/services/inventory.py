from __future__ import annotations

from typing import Dict, List

from loguru import logger

from ..models.common import BloodType
from ..models.inventory import InventoryEntry, InventoryUpdate
from ..store import MongoStore

INITIAL_STOCK: Dict[BloodType, int] = {
    BloodType.A_POS: 5,
    BloodType.B_POS: 2,
    BloodType.O_NEG: 1,
    BloodType.AB_POS: 0,
}


async def list_inventory(store: MongoStore) -> List[InventoryEntry]:
    return [
        InventoryEntry(blood_type=doc["blood_type"], units=doc.get("units", 0))
        for doc in await store.list_inventory()
    ]


async def set_inventory(store: MongoStore, blood_type: BloodType, units: int) -> InventoryUpdate:
    """Overwrite the stock for ``blood_type``, creating the entry on first use."""
    entry = InventoryEntry(blood_type=blood_type, units=units)
    stored, created = await store.upsert_inventory(entry.blood_type.value, entry.units)
    logger.info("Inventory {} set to {} unit(s)", entry.blood_type.value, entry.units)
    return InventoryUpdate(
        entry=InventoryEntry(blood_type=stored["blood_type"], units=stored["units"]),
        created=created,
        message="Added new blood group." if created else "Inventory updated.",
    )


async def seed_inventory(store: MongoStore) -> bool:
    if await store.count_inventory():
        return False
    await store.insert_inventory(
        [{"blood_type": blood_type.value, "units": units} for blood_type, units in INITIAL_STOCK.items()]
    )
    logger.info("Seeded inventory with {} blood groups", len(INITIAL_STOCK))
    return True
