from fastapi import APIRouter, Depends, HTTPException

from schemas.diary_schema import DailyNotesUpdate, TripDiary
from core.dependencies import get_trip_service
from core.exceptions import NotFoundError, PersistenceError
from services import diary_service
from services.trip_service import TripService

router = APIRouter(
    prefix="/trips/{trip_id}/diary",
    tags=["Diary"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=TripDiary)
def get_diary(trip_id: str, trip_service: TripService = Depends(get_trip_service)):
    """Gets the travel diary of a trip, one entry per day of its duration."""
    try:
        return diary_service.get_diary(trip_service.get_trip(trip_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("", response_model=TripDiary)
def save_diary(
    trip_id: str,
    update: DailyNotesUpdate,
    trip_service: TripService = Depends(get_trip_service),
):
    """Saves the daily notes of a trip, replacing the stored ones."""
    try:
        return diary_service.save_daily_notes(trip_service, trip_id, update.daily_notes)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError:
        raise HTTPException(status_code=502, detail="Could not save daily notes.")
