import logging
from typing import List, Optional

from core.exceptions import GearItemNotFoundError
from schemas.gear_schema import GearItem, GearItemCreate, GearItemUpdate
from services.storage import Storage, generate_key
from services.trip_service import TripService

logger = logging.getLogger(__name__)

GEAR_PATH = "gear"


class GearService:
    """The gear library. Trips only ever read it; edits are cascaded into trips here."""

    def __init__(self, storage: Storage, trip_service: Optional[TripService] = None):
        self._storage = storage
        self._trips = trip_service

    def _path(self, gear_id: str) -> str:
        return f"{GEAR_PATH}/{gear_id}"

    def list_gear(self) -> List[GearItem]:
        gear_data = self._storage.get(GEAR_PATH) or {}
        return [GearItem(**data) for data in gear_data.values()]

    def get_gear(self, gear_id: str) -> GearItem:
        data = self._storage.get(self._path(gear_id))
        if not data:
            raise GearItemNotFoundError(gear_id)
        return GearItem(**data)

    def add_gear(self, item_data: GearItemCreate) -> GearItem:
        item = GearItem(id=generate_key(), **item_data.model_dump())
        self._storage.set(self._path(item.id), item.model_dump(mode="json"))
        logger.info("Gear item added: %s (%s)", item.name, item.id)
        return item

    def update_gear(self, gear_id: str, item_data: GearItemUpdate) -> GearItem:
        previous = self.get_gear(gear_id)
        item = GearItem(id=gear_id, **item_data.model_dump())
        self._storage.set(self._path(gear_id), item.model_dump(mode="json"))

        # A bag turned into a plain item can't hold anything any more.
        if previous.is_container and not item.is_container and self._trips:
            self._trips.release_container_in_all_trips(gear_id)
        # A new bag can't stay inside a bag that is itself packed.
        if item.is_container and not previous.is_container and self._trips:
            self._trips.unnest_container_in_all_trips(gear_id)
        return item

    def delete_gear(self, gear_id: str) -> None:
        self.get_gear(gear_id)
        self._storage.delete(self._path(gear_id))
        if self._trips:
            self._trips.remove_gear_from_all_trips(gear_id)
        logger.info("Gear item deleted: %s", gear_id)
