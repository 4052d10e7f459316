import datetime
import logging

from schemas.bike_schema import BikeCreate
from schemas.gear_schema import GearItemCreate, ItemType
from schemas.trip_schema import TripCreate

logger = logging.getLogger(__name__)

DEMO_TRIPS = [
    {
        "name": "Coastal Cruise California",
        "description": "A scenic ride along the Pacific Coast Highway.",
        "gpx_data": "<?xml version=\"1.0\"?><gpx><trk><trkseg><trkpt lat=\"34.0522\" lon=\"-118.2437\"></trkpt><trkpt lat=\"34.0520\" lon=\"-118.2430\"></trkpt></trkseg></trk></gpx>",
        "days_ago": 2,
    },
    {
        "name": "Rocky Mountain Challenge",
        "description": "High altitude cycling through Colorado's Rockies.",
        "gpx_data": "<?xml version=\"1.0\"?><gpx><trk><trkseg><trkpt lat=\"39.7392\" lon=\"-104.9903\"></trkpt><trkpt lat=\"39.7400\" lon=\"-104.9910\"></trkseg></trk></gpx>",
        "days_ago": 1,
    },
]

DEMO_GEAR = [
    GearItemCreate(name="Tent", weight=2200, category="Sleeping", notes="Two person, freestanding"),
    GearItemCreate(name="Sleeping Bag", weight=900, category="Sleeping"),
    GearItemCreate(name="Stove", weight=350, category="Cooking"),
    GearItemCreate(name="Cook Pot", weight=220, category="Cooking"),
    GearItemCreate(name="Rear Pannier (Left)", weight=1500, category="Bags", item_type=ItemType.CONTAINER),
    GearItemCreate(name="Rear Pannier (Right)", weight=1500, category="Bags", item_type=ItemType.CONTAINER),
    GearItemCreate(name="Handlebar Bag", weight=450, category="Bags", item_type=ItemType.CONTAINER),
    GearItemCreate(name="Multi-tool", weight=180),
]

DEMO_BIKES = [
    BikeCreate(name="Touring rig", brand="Surly", model="Long Haul Trucker", year="2021"),
]


def seed_demo_data(services) -> bool:
    """Fills an empty store with demo trips, gear and a bike. Returns False if data already exists."""
    if services.trips.list_trips() or services.gear.list_gear():
        logger.info("Store already has data, skipping demo seed")
        return False

    now = datetime.datetime.now(datetime.timezone.utc)
    for trip in DEMO_TRIPS:
        services.trips.create_trip(
            TripCreate(name=trip["name"], description=trip["description"], gpx_data=trip["gpx_data"]),
            created_at=now - datetime.timedelta(days=trip["days_ago"]),
            lenient_gpx=True,
        )
    for item in DEMO_GEAR:
        services.gear.add_gear(item)
    for bike in DEMO_BIKES:
        services.bikes.add_bike(bike)

    logger.info("Seeded %d demo trips, %d gear items and %d bikes", len(DEMO_TRIPS), len(DEMO_GEAR), len(DEMO_BIKES))
    return True
