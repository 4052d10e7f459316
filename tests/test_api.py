"""
End-to-end tests through the HTTP API with in-memory storage.
"""
import pytest

from core.exceptions import PersistenceError


@pytest.fixture
def trip_id(client):
    response = client.post("/api/trips", json={"name": "Coastal Cruise", "duration_days": 2})
    assert response.status_code == 201
    return response.json()["id"]


def _gear(client, name, weight, item_type="item", category=None):
    body = {"name": name, "weight": weight, "item_type": item_type}
    if category:
        body["category"] = category
    response = client.post("/api/gear", json=body)
    assert response.status_code == 201
    return response.json()["id"]


class TestGearApi:

    def test_add_and_group(self, client):
        _gear(client, "Tent", 2200, category="Sleeping")
        _gear(client, "zip ties", 20)
        _gear(client, "Cook pot", 220, category="Cooking")

        groups = client.get("/api/gear/grouped").json()
        assert [group["category"] for group in groups] == ["Cooking", "Sleeping", "Miscellaneous"]

    def test_weight_must_be_positive(self, client):
        response = client.post("/api/gear", json={"name": "Feather", "weight": 0})
        assert response.status_code == 422

    def test_unknown_item(self, client):
        assert client.get("/api/gear/missing").status_code == 404
        assert client.delete("/api/gear/missing").status_code == 404


class TestTripsApi:

    def test_create_list_get(self, client, trip_id):
        assert [trip["id"] for trip in client.get("/api/trips").json()] == [trip_id]
        trip = client.get(f"/api/trips/{trip_id}").json()
        assert trip["selected_gear_ids"] == []
        assert trip["status"] == "planned"

    def test_missing_trip(self, client):
        assert client.get("/api/trips/missing").status_code == 404

    def test_unknown_bike(self, client):
        response = client.post("/api/trips", json={"name": "Loop", "bike_id": "missing"})
        assert response.status_code == 404

    def test_bad_gpx(self, client, trip_id):
        response = client.post(f"/api/trips/{trip_id}/gpx", json={"gpx_data": "<gpx><trk>"})
        assert response.status_code == 400

    def test_status(self, client, trip_id):
        response = client.put(f"/api/trips/{trip_id}/status", json={"status": "completed"})
        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert client.put(f"/api/trips/{trip_id}/status", json={"status": "cancelled"}).status_code == 422

    def test_delete(self, client, trip_id):
        assert client.delete(f"/api/trips/{trip_id}").status_code == 204
        assert client.get(f"/api/trips/{trip_id}").status_code == 404

    def test_weather_points_need_a_route(self, client, trip_id):
        response = client.post(f"/api/trips/{trip_id}/weather-points")
        assert response.status_code == 400


class TestDiaryApi:

    def test_save_and_get(self, client, trip_id):
        response = client.put(f"/api/trips/{trip_id}/diary", json={"daily_notes": {"1": "Fog until noon"}})
        assert response.status_code == 200

        diary = client.get(f"/api/trips/{trip_id}/diary").json()
        assert diary["days"] == [{"day": 1, "note": "Fog until noon"}, {"day": 2, "note": ""}]

    def test_day_out_of_range(self, client, trip_id):
        response = client.put(f"/api/trips/{trip_id}/diary", json={"daily_notes": {"5": "?"}})
        assert response.status_code == 400


class TestPackingApi:

    @pytest.fixture
    def gear(self, client):
        return {
            "tent": _gear(client, "Tent", 2200),
            "bag": _gear(client, "Bag", 1500, item_type="container"),
            "stove": _gear(client, "Stove", 350),
        }

    def test_pack_save_flow(self, client, trip_id, gear):
        for gear_id in gear.values():
            client.post(f"/api/packing/{trip_id}/toggle/{gear_id}")
        client.post(f"/api/packing/{trip_id}/pack", json={"item_id": gear["tent"], "container_id": gear["bag"]})
        view = client.post(
            f"/api/packing/{trip_id}/pack", json={"item_id": gear["stove"], "container_id": gear["bag"]},
        ).json()

        assert [item["id"] for item in view["top_level_items"]] == [gear["bag"]]
        assert view["loose_items"] == []
        assert view["total_weight_grams"] == 4050
        assert view["has_unsaved_changes"] is True

        saved = client.post(f"/api/packing/{trip_id}/save").json()
        assert saved["has_unsaved_changes"] is False
        trip = client.get(f"/api/trips/{trip_id}").json()
        assert trip["packed_items"] == {gear["bag"]: [gear["tent"], gear["stove"]]}

    def test_deselecting_bag_loosens_contents(self, client, trip_id, gear):
        for gear_id in gear.values():
            client.post(f"/api/packing/{trip_id}/toggle/{gear_id}")
        client.post(f"/api/packing/{trip_id}/pack", json={"item_id": gear["tent"], "container_id": gear["bag"]})

        view = client.post(f"/api/packing/{trip_id}/toggle/{gear['bag']}").json()

        assert view["packed_items"] == {}
        assert [loose["item"]["id"] for loose in view["loose_items"]] == [gear["tent"], gear["stove"]]

    def test_invalid_pack_is_ignored(self, client, trip_id, gear):
        client.post(f"/api/packing/{trip_id}/toggle/{gear['tent']}")
        response = client.post(
            f"/api/packing/{trip_id}/pack", json={"item_id": gear["tent"], "container_id": gear["tent"]},
        )
        assert response.status_code == 200
        assert response.json()["packed_items"] == {}

    def test_unpack_without_container(self, client, trip_id, gear):
        for gear_id in gear.values():
            client.post(f"/api/packing/{trip_id}/toggle/{gear_id}")
        client.post(f"/api/packing/{trip_id}/pack", json={"item_id": gear["tent"], "container_id": gear["bag"]})

        view = client.post(f"/api/packing/{trip_id}/unpack", json={"item_id": gear["tent"]}).json()
        assert view["packed_items"] == {gear["bag"]: []}
        loose = next(item for item in view["loose_items"] if item["item"]["id"] == gear["tent"])
        assert loose["available_container_ids"] == [gear["bag"]]

    def test_failed_save_reports_and_keeps_edits(self, client, services, trip_id, gear, monkeypatch):
        def fail(*args, **kwargs):
            raise PersistenceError("offline")

        client.post(f"/api/packing/{trip_id}/toggle/{gear['tent']}")
        monkeypatch.setattr(services.trips, "persist_trip_gear", fail)

        response = client.post(f"/api/packing/{trip_id}/save")
        assert response.status_code == 502
        assert response.json()["detail"] == "Could not save gear selections."
        assert client.get(f"/api/packing/{trip_id}").json()["has_unsaved_changes"] is True

    def test_deleted_gear_is_removed_from_open_drafts(self, client, trip_id, gear):
        client.post(f"/api/packing/{trip_id}/toggle/{gear['stove']}")
        client.delete(f"/api/gear/{gear['stove']}")
        assert client.get(f"/api/packing/{trip_id}").json()["selected_gear_ids"] == []

    def test_item_turned_into_bag_leaves_nested_bag(self, client, trip_id, gear):
        pouch = _gear(client, "Pouch", 80, item_type="container")
        spoon = _gear(client, "Spoon", 20)
        for gear_id in [*gear.values(), pouch, spoon]:
            client.post(f"/api/packing/{trip_id}/toggle/{gear_id}")
        client.post(f"/api/packing/{trip_id}/pack", json={"item_id": pouch, "container_id": gear["bag"]})
        client.post(f"/api/packing/{trip_id}/pack", json={"item_id": gear["stove"], "container_id": pouch})

        response = client.put(f"/api/gear/{gear['stove']}", json={"name": "Stove", "weight": 350, "item_type": "container"})
        assert response.status_code == 200

        view = client.post(f"/api/packing/{trip_id}/pack", json={"item_id": spoon, "container_id": gear["stove"]}).json()
        assert view["packed_items"] == {gear["bag"]: [pouch], pouch: [], gear["stove"]: [spoon]}

    def test_discard(self, client, trip_id, gear):
        client.post(f"/api/packing/{trip_id}/toggle/{gear['stove']}")
        assert client.delete(f"/api/packing/{trip_id}").status_code == 204
        assert client.get(f"/api/packing/{trip_id}").json()["selected_gear_ids"] == []

    def test_unknown_trip(self, client):
        assert client.get("/api/packing/missing").status_code == 404
