class NotFoundError(ValueError):
    """Base class for lookups of records that do not exist."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} '{record_id}' not found.")


class TripNotFoundError(NotFoundError):
    def __init__(self, trip_id: str):
        super().__init__("Trip", trip_id)


class GearItemNotFoundError(NotFoundError):
    def __init__(self, gear_id: str):
        super().__init__("Gear item", gear_id)


class BikeNotFoundError(NotFoundError):
    def __init__(self, bike_id: str):
        super().__init__("Bike", bike_id)


class PersistenceError(Exception):
    """Raised when the storage backend rejects or fails a write."""


class SaveInProgressError(Exception):
    """Raised when a trip's gear is already being saved."""

    def __init__(self, trip_id: str):
        self.trip_id = trip_id
        super().__init__(f"Gear selections for trip '{trip_id}' are already being saved.")


class GpxParseError(ValueError):
    """Raised when GPX data cannot be read."""


class AIServiceError(Exception):
    """Raised when the AI provider fails or returns something unusable."""
