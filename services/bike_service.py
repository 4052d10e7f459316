import logging
from typing import List, Optional

from core.exceptions import BikeNotFoundError
from schemas.bike_schema import Bike, BikeCreate
from services.storage import Storage, generate_key
from services.trip_service import TripService

logger = logging.getLogger(__name__)

BIKES_PATH = "bikes"


class BikeService:
    """Bikes the user tours on. A trip may point at one of them."""

    def __init__(self, storage: Storage, trip_service: Optional[TripService] = None):
        self._storage = storage
        self._trips = trip_service

    def list_bikes(self) -> List[Bike]:
        bikes_data = self._storage.get(BIKES_PATH) or {}
        return sorted((Bike(**data) for data in bikes_data.values()), key=lambda bike: bike.name.casefold())

    def get_bike(self, bike_id: str) -> Bike:
        data = self._storage.get(f"{BIKES_PATH}/{bike_id}")
        if not data:
            raise BikeNotFoundError(bike_id)
        return Bike(**data)

    def add_bike(self, bike_data: BikeCreate) -> Bike:
        bike = Bike(id=generate_key(), **bike_data.model_dump())
        self._storage.set(f"{BIKES_PATH}/{bike.id}", bike.model_dump(mode="json"))
        logger.info("Bike added: %s (%s)", bike.name, bike.id)
        return bike

    def update_bike(self, bike_id: str, bike_data: BikeCreate) -> Bike:
        self.get_bike(bike_id)
        bike = Bike(id=bike_id, **bike_data.model_dump())
        self._storage.set(f"{BIKES_PATH}/{bike_id}", bike.model_dump(mode="json"))
        return bike

    def delete_bike(self, bike_id: str) -> None:
        self.get_bike(bike_id)
        self._storage.delete(f"{BIKES_PATH}/{bike_id}")
        if self._trips:
            self._trips.clear_bike(bike_id)
        logger.info("Bike deleted: %s", bike_id)
