# tests/test_items_uoms.py
import pytest


@pytest.fixture
def customer(auth_headers, make_customer):
    return make_customer(auth_headers, "CUST-01")


@pytest.fixture
def item(auth_headers, customer, make_item):
    return make_item(auth_headers, customer["id"], "SKU-100")


def _uom(client, headers, item_id, code="EA", **extra):
    return client.post(
        "/api/uoms",
        json={"item_id": item_id, "uom_code": code, "name": code.title(), **extra},
        headers=headers,
    )


# =========================
# ITEMS
# =========================
def test_item_defaults(item, customer):
    assert item["customer_id"] == customer["id"]
    assert item["code"] == "SKU-100"
    assert item["type"] == "finished_good"
    assert item["status"] == "active"
    assert item["currency"] == "USD"
    assert item["weight_unit"] == "lbs"
    assert item["dimensions"] == {}
    assert item["lot_tracking"] is False


def test_item_code_unique_per_customer(client, auth_headers, customer, item, make_customer, make_item):
    r = client.post(
        "/api/items",
        json={"customer_id": customer["id"], "item_code": "SKU-100", "name": "Clone"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Item code already exists for this customer"

    other = make_customer(auth_headers, "CUST-02")
    assert make_item(auth_headers, other["id"], "SKU-100")["customer_id"] == other["id"]


def test_item_for_foreign_customer_rejected(client, auth_headers, other_tenant_headers, make_customer):
    foreign = make_customer(other_tenant_headers, "FOREIGN")
    r = client.post(
        "/api/items",
        json={"customer_id": foreign["id"], "item_code": "X-1", "name": "Smuggled"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid customer ID"


def test_item_temperature_range(client, auth_headers, customer, item):
    r = client.post(
        "/api/items",
        json={
            "customer_id": customer["id"],
            "item_code": "COLD-1",
            "name": "Frozen peas",
            "temperature_min": 5,
            "temperature_max": -5,
        },
        headers=auth_headers,
    )
    assert r.status_code == 400

    client.put(
        f"/api/items/{item['id']}", json={"temperature_max": 4}, headers=auth_headers
    )
    r = client.put(
        f"/api/items/{item['id']}", json={"temperature_min": 10}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["error"] == "temperature_min must be less than or equal to temperature_max"


def test_item_search_and_stats(client, auth_headers, customer, make_item):
    make_item(auth_headers, customer["id"], "BOLT-1", name="Hex bolt", lot_tracking=True)
    make_item(auth_headers, customer["id"], "NUT-1", name="Hex nut", status="discontinued")
    make_item(auth_headers, customer["id"], "WASHER-1", name="Washer", sku="W-99")

    hits = client.get("/api/items?search=hex", headers=auth_headers).json()["data"]
    assert sorted(i["code"] for i in hits) == ["BOLT-1", "NUT-1"]

    by_sku = client.get("/api/items?search=W-99", headers=auth_headers).json()["data"]
    assert [i["code"] for i in by_sku] == ["WASHER-1"]

    stats = client.get(
        f"/api/items/stats?customer_id={customer['id']}", headers=auth_headers
    ).json()["data"]
    assert stats == {
        "totalItems": 3,
        "activeItems": 2,
        "inactiveItems": 0,
        "discontinuedItems": 1,
        "lotTrackedItems": 1,
        "serialTrackedItems": 0,
    }


def test_item_delete_blocked_by_uoms(client, auth_headers, item):
    uom = _uom(client, auth_headers, item["id"]).json()["data"]

    r = client.delete(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["details"] == {"dependencies": ["UOMs"]}

    client.delete(f"/api/uoms/{uom['id']}", headers=auth_headers)
    r = client.delete(f"/api/items/{item['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"] == {"id": item["id"]}


# =========================
# UOMS
# =========================
def test_uom_code_unique_per_item(client, auth_headers, customer, item, make_item):
    assert _uom(client, auth_headers, item["id"]).status_code == 201

    dup = _uom(client, auth_headers, item["id"])
    assert dup.status_code == 400
    assert dup.json()["error"] == "UOM code already exists for this item"

    other = make_item(auth_headers, customer["id"], "SKU-200")
    assert _uom(client, auth_headers, other["id"]).status_code == 201


def test_uom_for_foreign_item_rejected(client, auth_headers, other_tenant_headers, make_customer, make_item):
    foreign_customer = make_customer(other_tenant_headers, "FOREIGN")
    foreign_item = make_item(other_tenant_headers, foreign_customer["id"])

    r = _uom(client, auth_headers, foreign_item["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Item not found or does not belong to your tenant"


def test_base_uom_must_belong_to_same_item(client, auth_headers, customer, item, make_item):
    each = _uom(client, auth_headers, item["id"], "EA", is_base_uom=True).json()["data"]
    case = _uom(
        client, auth_headers, item["id"], "CS",
        uom_type="case", conversion_factor=12, base_uom_id=each["id"],
    )
    assert case.status_code == 201
    assert case.json()["data"]["conversion_factor"] == 12.0

    other = make_item(auth_headers, customer["id"], "SKU-200")
    r = _uom(client, auth_headers, other["id"], "CS", base_uom_id=each["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Base UOM not found or does not belong to the specified item"


def test_uom_cannot_be_its_own_base(client, auth_headers, item):
    uom = _uom(client, auth_headers, item["id"]).json()["data"]

    r = client.put(
        f"/api/uoms/{uom['id']}", json={"base_uom_id": uom["id"]}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["error"] == "A UOM cannot be its own base UOM"


def test_base_uom_with_parent_rejected(client, auth_headers, item):
    each = _uom(client, auth_headers, item["id"], "EA").json()["data"]
    r = _uom(client, auth_headers, item["id"], "CS", is_base_uom=True, base_uom_id=each["id"])
    assert r.status_code == 400
    assert r.json()["error_code"] == "VALIDATION_ERROR"


def test_base_uom_delete_blocked_by_derived(client, auth_headers, item):
    each = _uom(client, auth_headers, item["id"], "EA", is_base_uom=True).json()["data"]
    _uom(client, auth_headers, item["id"], "CS", base_uom_id=each["id"])

    r = client.delete(f"/api/uoms/{each['id']}", headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["details"] == {"dependencies": ["derived UOMs"]}


def test_single_default_uom_per_item(client, auth_headers, item):
    first = _uom(client, auth_headers, item["id"], "EA", is_default=True).json()["data"]
    second = _uom(client, auth_headers, item["id"], "CS", is_default=True).json()["data"]

    listed = client.get(f"/api/uoms?item_id={item['id']}", headers=auth_headers).json()["data"]
    defaults = {u["id"]: u["is_default"] for u in listed}
    assert defaults == {first["id"]: False, second["id"]: True}

    client.put(f"/api/uoms/{first['id']}", json={"is_default": True}, headers=auth_headers)
    stats = client.get(
        f"/api/uoms/stats?item_id={item['id']}", headers=auth_headers
    ).json()["data"]
    assert stats["totalUOMs"] == 2
    assert stats["defaultUOMs"] == 1


def test_uom_list_ordered_by_sort_order(client, auth_headers, item):
    _uom(client, auth_headers, item["id"], "PL", sort_order=3)
    _uom(client, auth_headers, item["id"], "EA", sort_order=1)
    _uom(client, auth_headers, item["id"], "CS", sort_order=2)

    listed = client.get(f"/api/uoms?item_id={item['id']}", headers=auth_headers).json()["data"]
    assert [u["code"] for u in listed] == ["EA", "CS", "PL"]


def test_two_step_base_cycle_rejected(client, auth_headers, item):
    each = _uom(client, auth_headers, item["id"], "EA").json()["data"]
    case = _uom(client, auth_headers, item["id"], "CS", base_uom_id=each["id"]).json()["data"]

    r = client.put(
        f"/api/uoms/{each['id']}", json={"base_uom_id": case["id"]}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Base UOM must not reference another base UOM"

    stored = client.get(f"/api/uoms/{each['id']}", headers=auth_headers).json()["data"]
    assert stored["base_uom_id"] is None


def test_derived_uom_cannot_be_used_as_base(client, auth_headers, item):
    each = _uom(client, auth_headers, item["id"], "EA").json()["data"]
    case = _uom(client, auth_headers, item["id"], "CS", base_uom_id=each["id"]).json()["data"]

    r = _uom(client, auth_headers, item["id"], "PL", base_uom_id=case["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Base UOM must not reference another base UOM"


def test_uom_with_derived_units_cannot_take_a_base(client, auth_headers, item):
    each = _uom(client, auth_headers, item["id"], "EA").json()["data"]
    _uom(client, auth_headers, item["id"], "CS", base_uom_id=each["id"])
    other_root = _uom(client, auth_headers, item["id"], "KG").json()["data"]

    r = client.put(
        f"/api/uoms/{each['id']}", json={"base_uom_id": other_root["id"]}, headers=auth_headers
    )
    assert r.status_code == 400
    assert r.json()["error"] == "A UOM used as a base by other UOMs cannot reference a base UOM"
