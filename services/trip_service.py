import datetime
import logging
from typing import Dict, List, Optional

from core.exceptions import GpxParseError, TripNotFoundError
from schemas.trip_schema import GpxPoint, Trip, TripCreate, TripStatus, TripUpdate, Waypoint
from services import gpx_service, packing_service
from services.storage import Storage, generate_key

logger = logging.getLogger(__name__)

TRIPS_PATH = "trips"


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def _parse_or_empty(gpx_data: Optional[str]) -> List[GpxPoint]:
    """Parsed points for display, or an empty track when the GPX can't be read."""
    if not gpx_data:
        return []
    try:
        return gpx_service.parse_gpx_points(gpx_data)
    except GpxParseError as e:
        logger.warning("Could not parse GPX data: %s", e)
        return []


class TripService:
    """Reads and writes trips, including their gear selection, diary and status."""

    def __init__(self, storage: Storage):
        self._storage = storage

    def _path(self, trip_id: str) -> str:
        return f"{TRIPS_PATH}/{trip_id}"

    def list_trips(self) -> List[Trip]:
        """All trips, newest first."""
        trips_data = self._storage.get(TRIPS_PATH) or {}
        trips = [Trip(**data) for data in trips_data.values()]
        return sorted(trips, key=lambda trip: trip.created_at, reverse=True)

    def get_trip(self, trip_id: str) -> Trip:
        trip_data = self._storage.get(self._path(trip_id))
        if not trip_data:
            raise TripNotFoundError(trip_id)
        return Trip(**trip_data)

    def create_trip(
        self,
        trip_data: TripCreate,
        created_at: Optional[datetime.datetime] = None,
        lenient_gpx: bool = False,
    ) -> Trip:
        """
        Stores a new trip with an empty gear selection, diary and packing map.

        GPX data that can't be parsed raises GpxParseError, unless `lenient_gpx`
        is set, in which case the trip is kept with an empty track.
        """
        if lenient_gpx:
            parsed_gpx = _parse_or_empty(trip_data.gpx_data)
        elif trip_data.gpx_data:
            parsed_gpx = gpx_service.parse_gpx_points(trip_data.gpx_data)
        else:
            parsed_gpx = []

        trip_id = generate_key()
        timestamp = created_at.isoformat() if created_at else _now()
        trip = Trip(
            id=trip_id,
            **trip_data.model_dump(),
            parsed_gpx=parsed_gpx,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._storage.set(self._path(trip_id), trip.model_dump(mode="json"))
        logger.info("Trip created: %s (%s)", trip.name, trip_id)
        return trip

    def update_trip(self, trip_id: str, changes: TripUpdate) -> Trip:
        trip = self.get_trip(trip_id)
        values = changes.model_dump(exclude_unset=True)
        if "gpx_data" in values and values["gpx_data"] != trip.gpx_data:
            # A new route invalidates the points picked along the old one.
            gpx_data = values["gpx_data"]
            values["parsed_gpx"] = gpx_service.parse_gpx_points(gpx_data) if gpx_data else []
            values["weather_waypoints"] = []
        return self._update(trip, values)

    def delete_trip(self, trip_id: str) -> None:
        self.get_trip(trip_id)
        self._storage.delete(self._path(trip_id))
        logger.info("Trip deleted: %s", trip_id)

    def _update(self, trip: Trip, values: Dict) -> Trip:
        # Validate the merged record before it is written.
        updated = Trip(**{**trip.model_dump(), **values, "updated_at": _now()})
        self._storage.set(self._path(trip.id), updated.model_dump(mode="json"))
        return updated

    # --- Collaborator operations used by the packing model, diary and status toggle ---

    def persist_trip_gear(self, trip_id: str, selected_gear_ids: List[str], packed_items: Dict[str, List[str]]) -> Trip:
        """Replaces the trip's gear selection and packing map in one write."""
        trip = self._update(self.get_trip(trip_id), {
            "selected_gear_ids": list(selected_gear_ids),
            "packed_items": {container_id: list(ids) for container_id, ids in packed_items.items()},
        })
        logger.info("Saved gear for trip %s: %d items, %d bags", trip_id, len(selected_gear_ids), len(packed_items))
        return trip

    def persist_daily_notes(self, trip_id: str, daily_notes: Dict[int, str]) -> Trip:
        return self._update(self.get_trip(trip_id), {"daily_notes": dict(daily_notes)})

    def persist_trip_status(self, trip_id: str, status: TripStatus) -> Trip:
        trip = self._update(self.get_trip(trip_id), {"status": TripStatus(status)})
        logger.info("Trip %s marked %s", trip_id, trip.status.value)
        return trip

    def set_gpx(self, trip_id: str, gpx_data: str) -> Trip:
        return self.update_trip(trip_id, TripUpdate(gpx_data=gpx_data))

    def set_weather_waypoints(self, trip_id: str, waypoints: List[Waypoint]) -> Trip:
        return self._update(self.get_trip(trip_id), {"weather_waypoints": list(waypoints)})

    # --- Keeping trips consistent with the gear library and bikes ---

    def _rewrite_gear(self, transform) -> None:
        for trip in self.list_trips():
            before = packing_service.selection_from_trip(trip)
            after = transform(before)
            if after is not before:
                self.persist_trip_gear(trip.id, after.selected_gear_ids, after.packed_items)

    def remove_gear_from_all_trips(self, gear_id: str) -> None:
        self._rewrite_gear(lambda state: packing_service.remove_gear(state, gear_id))

    def release_container_in_all_trips(self, gear_id: str) -> None:
        self._rewrite_gear(lambda state: packing_service.drop_container(state, gear_id))

    def unnest_container_in_all_trips(self, gear_id: str) -> None:
        self._rewrite_gear(lambda state: packing_service.unnest_container(state, gear_id))

    def clear_bike(self, bike_id: str) -> None:
        for trip in self.list_trips():
            if trip.bike_id == bike_id:
                self._update(trip, {"bike_id": None})
