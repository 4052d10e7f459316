import pytest
from fastapi.testclient import TestClient

from core.dependencies import build_services
from main import create_app
from schemas.gear_schema import GearItemCreate, ItemType
from services.storage import InMemoryStorage


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def services(storage):
    return build_services(storage=storage)


@pytest.fixture
def client(services):
    return TestClient(create_app(services))


@pytest.fixture
def library(services):
    """Tent, bag and stove in the gear library, keyed by name."""
    tent = services.gear.add_gear(GearItemCreate(name="Tent", weight=2200, category="Sleeping"))
    bag = services.gear.add_gear(GearItemCreate(name="Bag", weight=1500, item_type=ItemType.CONTAINER, category="Bags"))
    stove = services.gear.add_gear(GearItemCreate(name="Stove", weight=350, category="Cooking"))
    return {"tent": tent, "bag": bag, "stove": stove}
