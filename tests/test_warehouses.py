# tests/test_warehouses.py
from app.services.warehouse import warehouse_service


def test_create_warehouse(client, auth_headers):
    r = client.post(
        "/api/warehouses",
        json={
            "name": "Main DC",
            "warehouse_code": "WH-01",
            "address": {"city": "Austin", "state": "TX"},
        },
        headers=auth_headers,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    data = body["data"]
    assert data["code"] == "WH-01"
    assert data["location"] == "Austin, TX"
    assert data["status"] == "active"
    assert data["timezone"] == "UTC"
    assert data["capacity_unit"] == "square_feet"


def test_duplicate_code_in_same_tenant_rejected(client, auth_headers, make_warehouse):
    make_warehouse(auth_headers, "WH-01")

    r = client.post(
        "/api/warehouses",
        json={"name": "Second", "warehouse_code": "WH-01"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Warehouse code already exists"
    assert r.json()["error_code"] == "WAREHOUSE_CODE_EXISTS"


def test_duplicate_caught_by_constraint_when_preflight_misses(
    client, auth_headers, make_warehouse, monkeypatch
):
    async def no_preflight(*args, **kwargs):
        return None

    # concurrent writers can both pass the pre-flight check
    monkeypatch.setattr(warehouse_service, "ensure_unique", no_preflight)
    make_warehouse(auth_headers, "WH-01")

    r = client.post(
        "/api/warehouses",
        json={"name": "Second", "warehouse_code": "WH-01"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Warehouse code already exists"
    assert r.json()["error_code"] == "WAREHOUSE_CODE_EXISTS"

    listed = client.get("/api/warehouses", headers=auth_headers).json()["data"]
    assert [w["code"] for w in listed] == ["WH-01"]


def test_same_code_allowed_in_other_tenant(
    client, auth_headers, other_tenant_headers, make_warehouse
):
    make_warehouse(auth_headers, "WH-01")
    make_warehouse(other_tenant_headers, "WH-01")

    mine = client.get("/api/warehouses", headers=auth_headers).json()["data"]
    theirs = client.get("/api/warehouses", headers=other_tenant_headers).json()["data"]
    assert len(mine) == 1
    assert len(theirs) == 1
    assert mine[0]["id"] != theirs[0]["id"]


def test_validation_error_is_400(client, auth_headers):
    r = client.post(
        "/api/warehouses",
        json={"name": "X", "warehouse_code": "WH-02"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    body = r.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["error"].startswith("name:")


def test_other_tenant_cannot_see_or_change_warehouse(
    client, auth_headers, other_tenant_headers, make_warehouse
):
    warehouse = make_warehouse(auth_headers)
    url = f"/api/warehouses/{warehouse['id']}"

    assert client.get(url, headers=other_tenant_headers).status_code == 404
    r = client.put(url, json={"name": "Hijacked"}, headers=other_tenant_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "Warehouse not found"
    assert client.delete(url, headers=other_tenant_headers).status_code == 404

    assert client.get(url, headers=auth_headers).json()["data"]["name"] == warehouse["name"]


def test_partial_update_keeps_unsent_fields(client, auth_headers, make_warehouse):
    warehouse = make_warehouse(auth_headers, manager_name="Pat")
    url = f"/api/warehouses/{warehouse['id']}"

    r = client.put(url, json={"is_active": False}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["status"] == "inactive"
    assert data["manager_name"] == "Pat"
    assert data["code"] == warehouse["code"]


def test_update_with_empty_body_rejected(client, auth_headers, make_warehouse):
    warehouse = make_warehouse(auth_headers)
    r = client.put(f"/api/warehouses/{warehouse['id']}", json={}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "No changes provided"


def test_update_rejects_null_for_required_field(client, auth_headers, make_warehouse):
    warehouse = make_warehouse(auth_headers)
    r = client.put(
        f"/api/warehouses/{warehouse['id']}",
        json={"name": None},
        headers=auth_headers,
    )
    assert r.status_code == 400


def test_update_to_existing_code_rejected(client, auth_headers, make_warehouse):
    make_warehouse(auth_headers, "WH-01")
    second = make_warehouse(auth_headers, "WH-02")

    r = client.put(
        f"/api/warehouses/{second['id']}",
        json={"warehouse_code": "WH-01"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Warehouse code already exists"

    # re-sending its own code is not a conflict
    r = client.put(
        f"/api/warehouses/{second['id']}",
        json={"warehouse_code": "WH-02", "name": "Renamed"},
        headers=auth_headers,
    )
    assert r.status_code == 200


def test_delete_blocked_by_door_until_door_removed(client, auth_headers, make_warehouse):
    warehouse = make_warehouse(auth_headers)
    door = client.post(
        "/api/doors",
        json={"warehouse_id": warehouse["id"], "door_number": "D1", "name": "Dock 1"},
        headers=auth_headers,
    ).json()["data"]

    r = client.delete(f"/api/warehouses/{warehouse['id']}", headers=auth_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["error_code"] == "WAREHOUSE_HAS_DEPENDENTS"
    assert "doors" in body["error"]
    assert body["details"] == {"dependencies": ["doors"]}

    assert client.delete(f"/api/doors/{door['id']}", headers=auth_headers).status_code == 200

    r = client.delete(f"/api/warehouses/{warehouse['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == warehouse["id"]
    assert client.get(f"/api/warehouses/{warehouse['id']}", headers=auth_headers).status_code == 404


def test_search_and_stats(client, auth_headers, other_tenant_headers, make_warehouse):
    make_warehouse(auth_headers, "WH-01", name="North Hub")
    make_warehouse(auth_headers, "WH-02", name="South Hub", is_active=False)
    make_warehouse(other_tenant_headers, "WH-09")

    found = client.get("/api/warehouses?search=north", headers=auth_headers).json()["data"]
    assert [w["code"] for w in found] == ["WH-01"]

    stats = client.get("/api/warehouses/stats", headers=auth_headers).json()["data"]
    assert stats == {"totalWarehouses": 2, "activeWarehouses": 1, "inactiveWarehouses": 1}


def test_mutations_are_audited(client, auth_headers, make_warehouse):
    make_warehouse(auth_headers, "WH-01")

    r = client.get("/api/activities?code=create_warehouse", headers=auth_headers)
    assert r.status_code == 200
    page = r.json()["data"]
    assert page["total"] == 1
    assert "created warehouse" in page["items"][0]["message"]
    assert "(admin@acme.com)" in page["items"][0]["message"]
