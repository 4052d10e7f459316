from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from schemas.trip_schema import GpxUploadRequest, Trip, TripCreate, TripStatusUpdate, TripUpdate
from core.dependencies import get_bike_service, get_draft_service, get_trip_service
from core.exceptions import NotFoundError, PersistenceError
from services.bike_service import BikeService
from services.gear_draft_service import GearDraftService
from services.trip_service import TripService

router = APIRouter(
    prefix="/trips",
    tags=["Trips"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[Trip])
def list_trips(trip_service: TripService = Depends(get_trip_service)):
    """Retrieves all trips, newest first."""
    return trip_service.list_trips()


@router.post("", response_model=Trip, status_code=status.HTTP_201_CREATED)
def create_trip(
    trip: TripCreate,
    trip_service: TripService = Depends(get_trip_service),
    bike_service: BikeService = Depends(get_bike_service),
):
    """
    Creates a new trip with an empty gear list.
    If GPX data is sent, its points are extracted for the map.
    """
    try:
        if trip.bike_id:
            bike_service.get_bike(trip.bike_id)
        return trip_service.create_trip(trip)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{trip_id}", response_model=Trip)
def get_trip(trip_id: str, trip_service: TripService = Depends(get_trip_service)):
    try:
        return trip_service.get_trip(trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{trip_id}", response_model=Trip)
def update_trip(
    trip_id: str,
    changes: TripUpdate,
    trip_service: TripService = Depends(get_trip_service),
    bike_service: BikeService = Depends(get_bike_service),
):
    """Edits a trip's name, description, bike, duration or route."""
    try:
        if changes.bike_id:
            bike_service.get_bike(changes.bike_id)
        return trip_service.update_trip(trip_id, changes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(
    trip_id: str,
    trip_service: TripService = Depends(get_trip_service),
    drafts: GearDraftService = Depends(get_draft_service),
):
    try:
        trip_service.delete_trip(trip_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    drafts.discard(trip_id)


@router.put("/{trip_id}/status", response_model=Trip)
def update_trip_status(
    trip_id: str,
    update: TripStatusUpdate,
    trip_service: TripService = Depends(get_trip_service),
):
    """Marks a trip as planned or completed."""
    try:
        return trip_service.persist_trip_status(trip_id, update.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=502, detail="Could not update trip status.")


@router.post("/{trip_id}/gpx", response_model=Trip)
def upload_gpx(
    trip_id: str,
    upload: GpxUploadRequest,
    trip_service: TripService = Depends(get_trip_service),
):
    """Attaches a GPX route to the trip, replacing the previous one and its weather points."""
    try:
        return trip_service.set_gpx(trip_id, upload.gpx_data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
