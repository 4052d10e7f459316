from typing import Dict

from schemas.diary_schema import DiaryDay, TripDiary
from schemas.trip_schema import Trip
from services.trip_service import TripService


def _clean_notes(daily_notes: Dict[int, str]) -> Dict[int, str]:
    """Drops blank notes so an emptied textarea is the same as one never written."""
    return {int(day): note for day, note in daily_notes.items() if note and note.strip()}


def daily_notes_changed(original: Dict[int, str], current: Dict[int, str]) -> bool:
    return _clean_notes(original) != _clean_notes(current)


def get_diary(trip: Trip) -> TripDiary:
    """Builds the day-by-day diary for a trip, one entry per day of its duration."""
    notes = _clean_notes(trip.daily_notes)
    days = []
    if trip.duration_days:
        days = [DiaryDay(day=day, note=notes.get(day, "")) for day in range(1, trip.duration_days + 1)]
    return TripDiary(trip_id=trip.id, duration_days=trip.duration_days, days=days, daily_notes=notes)


def save_daily_notes(trip_service: TripService, trip_id: str, daily_notes: Dict[int, str]) -> TripDiary:
    """Saves a trip's daily notes, replacing what was stored before."""
    trip = trip_service.get_trip(trip_id)
    if not trip.duration_days:
        raise ValueError("Set a duration for this trip to add daily notes.")

    out_of_range = sorted(day for day in daily_notes if not 1 <= int(day) <= trip.duration_days)
    if out_of_range:
        raise ValueError(f"Days {out_of_range} are outside the trip's {trip.duration_days} days.")

    notes = _clean_notes(daily_notes)
    if not daily_notes_changed(trip.daily_notes, notes):
        return get_diary(trip)
    return get_diary(trip_service.persist_daily_notes(trip_id, notes))
