from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict
from enum import Enum
import datetime


class TripStatus(str, Enum):
    PLANNED = "planned"
    COMPLETED = "completed"


class GpxPoint(BaseModel):
    """Schema for a single point of a GPX track."""
    lat: float
    lon: float
    ele: Optional[float] = None
    time: Optional[str] = None


class Waypoint(BaseModel):
    """Schema for a point along the route worth checking the weather at."""
    latitude: float
    longitude: float
    reason: str
    name: Optional[str] = None
    timestamp: Optional[float] = None


class TripBase(BaseModel):
    """Base schema for a trip."""
    name: str = Field(..., min_length=1, examples=["Coastal Cruise California"])
    description: str = Field("", examples=["A scenic ride along the Pacific Coast Highway."])
    bike_id: Optional[str] = None
    duration_days: Optional[int] = Field(None, gt=0, examples=[7])

    @field_validator("description", mode="before")
    @classmethod
    def _empty_description(cls, value):
        return value or ""


class TripCreate(TripBase):
    """Schema for creating a new trip."""
    gpx_data: Optional[str] = None


class TripUpdate(BaseModel):
    """Schema for editing a trip. Only the fields that are sent are changed."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    bike_id: Optional[str] = None
    duration_days: Optional[int] = Field(None, gt=0)
    gpx_data: Optional[str] = None


class Trip(TripBase):
    """Schema for returning a trip."""
    id: str
    gpx_data: Optional[str] = None
    parsed_gpx: List[GpxPoint] = Field(default_factory=list)
    weather_waypoints: List[Waypoint] = Field(default_factory=list)
    selected_gear_ids: List[str] = Field(default_factory=list)
    packed_items: Dict[str, List[str]] = Field(default_factory=dict)
    daily_notes: Dict[int, str] = Field(default_factory=dict)
    status: TripStatus = TripStatus.PLANNED
    created_at: datetime.datetime
    updated_at: datetime.datetime

    # The Realtime Database drops empty lists and maps, so they come back as None.
    @field_validator("parsed_gpx", "weather_waypoints", "selected_gear_ids", mode="before")
    @classmethod
    def _missing_list(cls, value):
        return value or []

    @field_validator("packed_items", mode="before")
    @classmethod
    def _missing_packing(cls, value):
        if not value:
            return {}
        return {container_id: list(ids or []) for container_id, ids in value.items()}

    # Maps keyed 1..n are returned by the Realtime Database as arrays with a None at index 0.
    @field_validator("daily_notes", mode="before")
    @classmethod
    def _daily_notes_from_array(cls, value):
        if not value:
            return {}
        if isinstance(value, list):
            return {day: note for day, note in enumerate(value) if note is not None}
        return value


class TripStatusUpdate(BaseModel):
    """Schema for marking a trip planned or completed."""
    status: TripStatus


class GpxUploadRequest(BaseModel):
    """Schema for attaching a GPX route to a trip."""
    gpx_data: str = Field(..., min_length=1)
