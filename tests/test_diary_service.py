import pytest

from schemas.trip_schema import TripCreate
from services import diary_service


@pytest.fixture
def trip(services):
    return services.trips.create_trip(TripCreate(name="Alps", duration_days=3))


def test_diary_has_a_day_per_trip_day(trip):
    diary = diary_service.get_diary(trip)
    assert [day.day for day in diary.days] == [1, 2, 3]
    assert all(day.note == "" for day in diary.days)


def test_trip_without_duration_has_no_days(services):
    trip = services.trips.create_trip(TripCreate(name="Someday"))
    assert diary_service.get_diary(trip).days == []
    with pytest.raises(ValueError):
        diary_service.save_daily_notes(services.trips, trip.id, {1: "Hello"})


def test_save_and_read_back(services, trip):
    diary = diary_service.save_daily_notes(services.trips, trip.id, {1: "Climbed the Stelvio", 3: "  "})

    assert diary.daily_notes == {1: "Climbed the Stelvio"}
    assert [day.note for day in diary.days] == ["Climbed the Stelvio", "", ""]
    assert services.trips.get_trip(trip.id).daily_notes == {1: "Climbed the Stelvio"}


def test_days_outside_duration_are_rejected(services, trip):
    with pytest.raises(ValueError, match="outside"):
        diary_service.save_daily_notes(services.trips, trip.id, {4: "Too late"})


def test_unchanged_notes_are_not_rewritten(services, trip, monkeypatch):
    diary_service.save_daily_notes(services.trips, trip.id, {2: "Rest day"})

    def fail(*args, **kwargs):
        raise AssertionError("should not persist unchanged notes")

    monkeypatch.setattr(services.trips, "persist_daily_notes", fail)
    diary = diary_service.save_daily_notes(services.trips, trip.id, {2: "Rest day", 1: ""})
    assert diary.daily_notes == {2: "Rest day"}


def test_daily_notes_changed():
    assert diary_service.daily_notes_changed({1: "a"}, {1: "a", 2: ""}) is False
    assert diary_service.daily_notes_changed({1: "a"}, {1: "b"}) is True
