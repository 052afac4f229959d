# tests/test_zones_locations.py
import uuid

import pytest


@pytest.fixture
def warehouse(auth_headers, make_warehouse):
    return make_warehouse(auth_headers, "WH-01")


def _zone(client, headers, warehouse_id, code="Z-A", zone_type="storage", **extra):
    r = client.post(
        "/api/zones",
        json={
            "warehouse_id": warehouse_id,
            "zone_code": code,
            "name": f"Zone {code}",
            "zone_type": zone_type,
            **extra,
        },
        headers=headers,
    )
    return r


def _location(client, headers, warehouse_id, code="A-01-01", **extra):
    return client.post(
        "/api/locations",
        json={"warehouse_id": warehouse_id, "location_code": code, **extra},
        headers=headers,
    )


# =========================
# ZONES
# =========================
def test_create_zone_maps_fields(client, auth_headers, warehouse):
    r = _zone(client, auth_headers, warehouse["id"])
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["code"] == "Z-A"
    assert data["type"] == "storage"
    assert data["status"] == "active"
    assert data["capacity_unit"] == "pallets"


def test_zone_in_foreign_warehouse_rejected(
    client, auth_headers, other_tenant_headers, make_warehouse
):
    foreign = make_warehouse(other_tenant_headers, "WH-99")
    r = _zone(client, auth_headers, foreign["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Warehouse not found or does not belong to your tenant"


def test_zone_code_unique_per_warehouse(client, auth_headers, warehouse, make_warehouse):
    assert _zone(client, auth_headers, warehouse["id"]).status_code == 201

    dup = _zone(client, auth_headers, warehouse["id"])
    assert dup.status_code == 400
    assert dup.json()["error"] == "Zone code already exists in this warehouse"

    second = make_warehouse(auth_headers, "WH-02")
    assert _zone(client, auth_headers, second["id"]).status_code == 201


def test_zone_temperature_range_validated(client, auth_headers, warehouse):
    r = _zone(
        client,
        auth_headers,
        warehouse["id"],
        temperature_controlled=True,
        temperature_min=10,
        temperature_max=2,
    )
    assert r.status_code == 400

    zone = _zone(
        client, auth_headers, warehouse["id"], temperature_min=2, temperature_max=8
    ).json()["data"]
    r = client.put(
        f"/api/zones/{zone['id']}", json={"temperature_min": 12}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["error"] == "temperature_min must be less than or equal to temperature_max"


def test_zone_delete_blocked_by_location(client, auth_headers, warehouse):
    zone = _zone(client, auth_headers, warehouse["id"]).json()["data"]
    location = _location(
        client, auth_headers, warehouse["id"], zone_id=zone["id"]
    ).json()["data"]

    r = client.delete(f"/api/zones/{zone['id']}", headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["details"] == {"dependencies": ["locations"]}

    client.delete(f"/api/locations/{location['id']}", headers=auth_headers)
    assert client.delete(f"/api/zones/{zone['id']}", headers=auth_headers).status_code == 200


def test_zone_with_locations_cannot_move(client, auth_headers, warehouse, make_warehouse):
    zone = _zone(client, auth_headers, warehouse["id"]).json()["data"]
    _location(client, auth_headers, warehouse["id"], zone_id=zone["id"])
    other = make_warehouse(auth_headers, "WH-02")

    r = client.put(
        f"/api/zones/{zone['id']}", json={"warehouse_id": other["id"]}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Cannot move zone with associated locations to another warehouse"


def test_zone_stats_and_filters(client, auth_headers, warehouse, make_warehouse):
    _zone(client, auth_headers, warehouse["id"], "Z-1", "storage")
    _zone(client, auth_headers, warehouse["id"], "Z-2", "receiving")
    _zone(client, auth_headers, warehouse["id"], "Z-3", "shipping", is_active=False)
    other = make_warehouse(auth_headers, "WH-02")
    _zone(client, auth_headers, other["id"], "Z-4", "staging")

    listed = client.get(
        f"/api/zones?warehouse_id={warehouse['id']}", headers=auth_headers
    ).json()["data"]
    assert sorted(z["code"] for z in listed) == ["Z-1", "Z-2", "Z-3"]

    stats = client.get("/api/zones/stats", headers=auth_headers).json()["data"]
    assert stats == {
        "totalZones": 4,
        "activeZones": 3,
        "inactiveZones": 1,
        "storageZones": 1,
        "receivingZones": 1,
        "shippingZones": 1,
        "stagingZones": 1,
    }

    scoped = client.get(
        f"/api/zones/stats?warehouse_id={other['id']}", headers=auth_headers
    ).json()["data"]
    assert scoped["totalZones"] == 1


def test_filter_by_foreign_warehouse_returns_nothing(
    client, auth_headers, other_tenant_headers, make_warehouse
):
    foreign = make_warehouse(other_tenant_headers, "WH-99")
    _zone(client, other_tenant_headers, foreign["id"])

    r = client.get(f"/api/zones?warehouse_id={foreign['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"] == []


# =========================
# LOCATIONS
# =========================
def test_create_location_defaults(client, auth_headers, warehouse):
    r = _location(client, auth_headers, warehouse["id"])
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["code"] == "A-01-01"
    assert data["type"] == "floor"
    assert data["capacity_unit"] == "units"
    assert data["weight_unit"] == "lbs"
    assert data["is_pickable"] is True
    assert data["zone_id"] is None


def test_location_zone_must_sit_in_same_warehouse(
    client, auth_headers, warehouse, make_warehouse
):
    other = make_warehouse(auth_headers, "WH-02")
    zone = _zone(client, auth_headers, other["id"]).json()["data"]

    r = _location(client, auth_headers, warehouse["id"], zone_id=zone["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Zone not found or does not belong to the specified warehouse"


def test_location_barcode_unique_across_tenants(
    client, auth_headers, other_tenant_headers, warehouse, make_warehouse
):
    assert _location(client, auth_headers, warehouse["id"], barcode="BC-1").status_code == 201

    foreign = make_warehouse(other_tenant_headers, "WH-99")
    r = _location(client, other_tenant_headers, foreign["id"], barcode="BC-1")
    assert r.status_code == 400
    assert r.json()["error"] == "Barcode already exists"

    r = _location(client, auth_headers, warehouse["id"], code="A-01-02", qr_code="QR-1")
    assert r.status_code == 201
    r = _location(client, auth_headers, warehouse["id"], code="A-01-03", qr_code="QR-1")
    assert r.status_code == 400
    assert r.json()["error"] == "QR code already exists"


def test_location_code_unique_per_warehouse(client, auth_headers, warehouse):
    _location(client, auth_headers, warehouse["id"])
    r = _location(client, auth_headers, warehouse["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Location code already exists in this warehouse"


def test_location_update_and_stats(client, auth_headers, warehouse):
    first = _location(client, auth_headers, warehouse["id"], location_type="rack").json()["data"]
    _location(
        client,
        auth_headers,
        warehouse["id"],
        code="BULK-1",
        location_type="floor",
        is_bulk_location=True,
        is_pickable=False,
    )

    r = client.put(
        f"/api/locations/{first['id']}",
        json={"location_type": "shelf", "is_active": False},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["data"]["type"] == "shelf"
    assert r.json()["data"]["status"] == "inactive"

    stats = client.get("/api/locations/stats", headers=auth_headers).json()["data"]
    assert stats == {
        "totalLocations": 2,
        "activeLocations": 1,
        "inactiveLocations": 1,
        "pickableLocations": 1,
        "bulkLocations": 1,
        "floorLocations": 1,
        "rackLocations": 0,
        "shelfLocations": 1,
        "binLocations": 0,
    }


def test_unknown_location_is_404(client, auth_headers):
    r = client.get(f"/api/locations/{uuid.uuid4()}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Location not found"


# =========================
# DOORS
# =========================
def test_door_number_unique_per_warehouse_and_stats(client, auth_headers, warehouse):
    body = {"warehouse_id": warehouse["id"], "door_number": "D1", "name": "Dock 1"}
    assert client.post("/api/doors", json=body, headers=auth_headers).status_code == 201

    dup = client.post("/api/doors", json=body, headers=auth_headers)
    assert dup.status_code == 400
    assert dup.json()["error"] == "Door number already exists in this warehouse"

    client.post(
        "/api/doors",
        json={
            "warehouse_id": warehouse["id"],
            "door_number": "D2",
            "name": "Dock 2",
            "type": "outbound",
            "status": "inactive",
        },
        headers=auth_headers,
    )

    stats = client.get("/api/doors/stats", headers=auth_headers).json()["data"]
    assert stats == {
        "totalDoors": 2,
        "activeDoors": 1,
        "inboundDoors": 1,
        "outboundDoors": 1,
        "stagingDoors": 0,
    }
