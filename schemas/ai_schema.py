from pydantic import BaseModel, Field
from typing import List

from schemas.trip_schema import Waypoint


class SuggestedWeatherPoint(BaseModel):
    """Schema for one point as returned by the AI."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    reason: str = Field(..., min_length=1, examples=["Campsite at the top of the pass"])


class WeatherPointsResponse(BaseModel):
    """Schema for returning the weather points stored on a trip."""
    trip_id: str
    waypoints: List[Waypoint]
