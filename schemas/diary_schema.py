from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class DailyNotesUpdate(BaseModel):
    """Schema for saving a trip's diary, one note per day number."""
    daily_notes: Dict[int, str] = Field(..., examples=[{1: "Headwind all day, camped by the river."}])


class DiaryDay(BaseModel):
    """A single day of the travel diary."""
    day: int
    note: str = ""


class TripDiary(BaseModel):
    """Schema for returning a trip's travel diary."""
    trip_id: str
    duration_days: Optional[int] = None
    days: List[DiaryDay]
    daily_notes: Dict[int, str]
