"""
Unsaved gear edits per trip.

A draft holds the selection last saved for a trip next to the working copy
the user is editing. Packing operations only touch the working copy; saving
hands a snapshot of it to the trip service. While a save is in flight the
draft can still be edited, and those edits stay unsaved until the next save.
A failed save leaves the working copy untouched so the user can retry.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi.concurrency import run_in_threadpool

from core.exceptions import PersistenceError, SaveInProgressError
from schemas.packing_schema import GearSelection, PackingView
from services import packing_service
from services.gear_service import GearService
from services.trip_service import TripService

logger = logging.getLogger(__name__)


@dataclass
class GearDraft:
    trip_id: str
    saved: GearSelection
    current: GearSelection
    is_saving: bool = False

    @property
    def has_unsaved_changes(self) -> bool:
        return packing_service.has_unsaved_changes(self.saved, self.current)


class GearDraftService:

    def __init__(self, trip_service: TripService, gear_service: GearService):
        self._trips = trip_service
        self._gear = gear_service
        self._drafts: Dict[str, GearDraft] = {}
        self._lock = threading.RLock()

    def get_draft(self, trip_id: str) -> GearDraft:
        """Returns the trip's draft, opening one from the stored trip if needed."""
        with self._lock:
            draft = self._drafts.get(trip_id)
            if draft is None:
                saved = packing_service.selection_from_trip(self._trips.get_trip(trip_id))
                draft = GearDraft(trip_id=trip_id, saved=saved, current=saved)
                self._drafts[trip_id] = draft
            return draft

    def view(self, trip_id: str) -> PackingView:
        catalog = self._gear.list_gear()
        with self._lock:
            draft = self.get_draft(trip_id)
            saved, current, is_saving = draft.saved, draft.current, draft.is_saving
        return packing_service.build_packing_view(trip_id, saved, current, catalog, is_saving=is_saving)

    def toggle(self, trip_id: str, gear_id: str) -> PackingView:
        with self._lock:
            draft = self.get_draft(trip_id)
            draft.current = packing_service.toggle_selection(draft.current, gear_id)
        return self.view(trip_id)

    def pack(self, trip_id: str, item_id: str, container_id: str) -> PackingView:
        catalog = self._gear.list_gear()
        with self._lock:
            draft = self.get_draft(trip_id)
            draft.current = packing_service.pack(draft.current, item_id, container_id, catalog)
        return self.view(trip_id)

    def unpack(self, trip_id: str, item_id: str, container_id: Optional[str] = None) -> PackingView:
        with self._lock:
            draft = self.get_draft(trip_id)
            draft.current = packing_service.unpack(draft.current, item_id, container_id)
        return self.view(trip_id)

    async def save(self, trip_id: str) -> PackingView:
        """
        Persists the working copy of a trip's gear.

        Raises:
            SaveInProgressError: a save for this trip has not finished yet.
            PersistenceError: the trip service failed; the draft is kept.
        """
        with self._lock:
            draft = self.get_draft(trip_id)
            if draft.is_saving:
                raise SaveInProgressError(trip_id)
            draft.is_saving = True
            snapshot = draft.current

        try:
            trip = await run_in_threadpool(
                self._trips.persist_trip_gear, trip_id, snapshot.selected_gear_ids, snapshot.packed_items,
            )
        except PersistenceError:
            logger.exception("Failed to save gear selections for trip %s", trip_id)
            raise
        finally:
            with self._lock:
                draft.is_saving = False

        with self._lock:
            draft.saved = packing_service.selection_from_trip(trip)
            if draft.current is snapshot:
                draft.current = draft.saved
        return self.view(trip_id)

    def discard(self, trip_id: str) -> None:
        """Drops unsaved edits; the next read starts again from the stored trip."""
        with self._lock:
            self._drafts.pop(trip_id, None)

    def remove_gear(self, gear_id: str) -> None:
        """Takes a deleted gear item out of every open draft."""
        with self._lock:
            for draft in self._drafts.values():
                draft.saved = packing_service.remove_gear(draft.saved, gear_id)
                draft.current = packing_service.remove_gear(draft.current, gear_id)

    def release_container(self, gear_id: str) -> None:
        with self._lock:
            for draft in self._drafts.values():
                draft.saved = packing_service.drop_container(draft.saved, gear_id)
                draft.current = packing_service.drop_container(draft.current, gear_id)

    def unnest_container(self, gear_id: str) -> None:
        with self._lock:
            for draft in self._drafts.values():
                draft.saved = packing_service.unnest_container(draft.saved, gear_id)
                draft.current = packing_service.unnest_container(draft.current, gear_id)
