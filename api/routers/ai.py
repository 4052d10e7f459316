from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from schemas.ai_schema import WeatherPointsResponse
from core.dependencies import get_trip_service
from core.exceptions import AIServiceError, NotFoundError
from services import ai_service
from services.trip_service import TripService

router = APIRouter(
    prefix="/trips",
    tags=["AI Features"],
    responses={404: {"description": "Not found"}},
)


@router.post("/{trip_id}/weather-points", response_model=WeatherPointsResponse)
async def fetch_weather_points(trip_id: str, trip_service: TripService = Depends(get_trip_service)):
    """
    Asks the AI which points along the trip's route are worth a weather check,
    and stores them on the trip.
    """
    try:
        trip = await run_in_threadpool(trip_service.get_trip, trip_id)
        waypoints = await ai_service.suggest_weather_waypoints(trip.gpx_data, trip.description)
        trip = await run_in_threadpool(trip_service.set_weather_waypoints, trip_id, waypoints)
        return WeatherPointsResponse(trip_id=trip.id, waypoints=trip.weather_waypoints)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=f"Failed to fetch weather points from AI: {e}")
