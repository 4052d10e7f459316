import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from core.config import Settings, settings as default_settings
from services.bike_service import BikeService
from services.gear_draft_service import GearDraftService
from services.gear_service import GearService
from services.storage import InMemoryStorage, Storage
from services.trip_service import TripService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    storage: Storage
    trips: TripService
    gear: GearService
    bikes: BikeService
    drafts: GearDraftService


def create_storage(settings: Settings) -> Storage:
    if settings.STORAGE_BACKEND == "firebase":
        # Imported here so the in-memory backend works without Firebase credentials.
        from services.firebase_service import FirebaseStorage
        return FirebaseStorage(settings.FIREBASE_SERVICE_ACCOUNT_KEY_JSON, settings.FIREBASE_DATABASE_URL)
    if settings.STORAGE_BACKEND != "memory":
        raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}', expected 'memory' or 'firebase'.")
    return InMemoryStorage()


def build_services(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> Services:
    """Constructs the services once, all sharing the same storage."""
    settings = settings or default_settings
    storage = storage if storage is not None else create_storage(settings)
    logger.info("Using %s storage", type(storage).__name__)

    trips = TripService(storage)
    gear = GearService(storage, trips)
    bikes = BikeService(storage, trips)
    drafts = GearDraftService(trips, gear)
    return Services(storage=storage, trips=trips, gear=gear, bikes=bikes, drafts=drafts)


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_trip_service(request: Request) -> TripService:
    return get_services(request).trips


def get_gear_service(request: Request) -> GearService:
    return get_services(request).gear


def get_bike_service(request: Request) -> BikeService:
    return get_services(request).bikes


def get_draft_service(request: Request) -> GearDraftService:
    return get_services(request).drafts
