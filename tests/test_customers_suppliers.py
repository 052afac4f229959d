# tests/test_customers_suppliers.py
import pytest


@pytest.fixture
def customer(auth_headers, make_customer):
    return make_customer(auth_headers, "CUST-01")


def _supplier(client, headers, customer_id, email="orders@northwind.com", **extra):
    return client.post(
        "/api/suppliers",
        json={"customer_id": customer_id, "name": "Northwind", "email": email, **extra},
        headers=headers,
    )


def _contact(client, headers, customer_id, first="Jane", **extra):
    return client.post(
        "/api/contacts",
        json={"customer_id": customer_id, "first_name": first, "last_name": "Doe", **extra},
        headers=headers,
    )


# =========================
# CUSTOMERS
# =========================
def test_customer_response_shape(client, auth_headers):
    r = client.post(
        "/api/customers",
        json={
            "name": "Contoso",
            "customer_code": "CONTOSO",
            "contact_email": "ops@contoso.com",
            "billing_address": {"city": "Denver", "state": "CO"},
            "credit_limit": "2500.50",
        },
        headers=auth_headers,
    )
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["code"] == "CONTOSO"
    assert data["email"] == "ops@contoso.com"
    assert data["location"] == "Denver, CO"
    assert data["credit_limit"] == 2500.5
    assert data["status"] == "active"


def test_customer_code_unique_per_tenant(
    client, auth_headers, other_tenant_headers, customer, make_customer
):
    r = client.post(
        "/api/customers",
        json={"name": "Again", "customer_code": "CUST-01"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Customer code already exists"

    make_customer(other_tenant_headers, "CUST-01")


def test_negative_credit_limit_rejected(client, auth_headers):
    r = client.post(
        "/api/customers",
        json={"name": "Broke", "customer_code": "BROKE", "credit_limit": -1},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error_code"] == "VALIDATION_ERROR"


def test_customer_delete_lists_every_dependency(client, auth_headers, customer, make_item):
    _supplier(client, auth_headers, customer["id"])
    _contact(client, auth_headers, customer["id"])
    make_item(auth_headers, customer["id"])

    r = client.delete(f"/api/customers/{customer['id']}", headers=auth_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["details"] == {"dependencies": ["contacts", "suppliers", "items"]}
    assert body["error"] == (
        "Cannot delete customer with associated contacts, suppliers and items. "
        "Please delete all contacts, suppliers and items first."
    )


def test_customer_stats(client, auth_headers, make_customer):
    make_customer(auth_headers, "C-1")
    make_customer(auth_headers, "C-2", is_active=False)

    stats = client.get("/api/customers/stats", headers=auth_headers).json()["data"]
    assert stats == {
        "totalCustomers": 2,
        "activeCustomers": 1,
        "inactiveCustomers": 1,
        "thisMonth": 2,
    }


# =========================
# SUPPLIERS
# =========================
def test_supplier_for_foreign_customer_rejected(
    client, auth_headers, other_tenant_headers, make_customer
):
    foreign = make_customer(other_tenant_headers, "FOREIGN")
    r = _supplier(client, auth_headers, foreign["id"])
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid customer ID"


def test_supplier_email_unique_per_customer(client, auth_headers, customer, make_customer):
    first = _supplier(client, auth_headers, customer["id"])
    assert first.status_code == 201
    assert first.json()["data"]["customer_name"] == customer["name"]

    dup = _supplier(client, auth_headers, customer["id"])
    assert dup.status_code == 400
    assert dup.json()["error"] == "A supplier with this email already exists for this customer"

    other = make_customer(auth_headers, "CUST-02")
    assert _supplier(client, auth_headers, other["id"]).status_code == 201


def test_supplier_cannot_be_moved_to_foreign_customer(
    client, auth_headers, other_tenant_headers, customer, make_customer
):
    supplier = _supplier(client, auth_headers, customer["id"]).json()["data"]
    foreign = make_customer(other_tenant_headers, "FOREIGN")

    r = client.put(
        f"/api/suppliers/{supplier['id']}",
        json={"customer_id": foreign["id"]},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid customer ID"


def test_supplier_list_filters_and_stats(client, auth_headers, customer, make_customer):
    other = make_customer(auth_headers, "CUST-02")
    _supplier(client, auth_headers, customer["id"], email="a@northwind.com")
    _supplier(client, auth_headers, customer["id"], email="b@northwind.com", status="inactive")
    _supplier(client, auth_headers, other["id"], email="c@northwind.com")

    listed = client.get(
        f"/api/suppliers?customer_id={customer['id']}", headers=auth_headers
    ).json()["data"]
    assert len(listed) == 2

    inactive = client.get("/api/suppliers?status=inactive", headers=auth_headers).json()["data"]
    assert [s["email"] for s in inactive] == ["b@northwind.com"]

    stats = client.get("/api/suppliers/stats", headers=auth_headers).json()["data"]
    assert stats["totalSuppliers"] == 3
    assert stats["activeSuppliers"] == 2
    assert stats["inactiveSuppliers"] == 1


# =========================
# CONTACTS
# =========================
def test_only_one_primary_contact_per_customer(client, auth_headers, customer):
    first = _contact(client, auth_headers, customer["id"], "Ann", is_primary=True).json()["data"]
    second = _contact(client, auth_headers, customer["id"], "Bob", is_primary=True).json()["data"]

    assert second["full_name"] == "Bob Doe"
    refreshed = client.get(f"/api/contacts/{first['id']}", headers=auth_headers).json()["data"]
    assert refreshed["is_primary"] is False

    stats = client.get(
        f"/api/contacts/stats?customer_id={customer['id']}", headers=auth_headers
    ).json()["data"]
    assert stats == {
        "totalContacts": 2,
        "activeContacts": 2,
        "inactiveContacts": 0,
        "primaryContacts": 1,
    }


def test_contacts_are_tenant_scoped(client, auth_headers, other_tenant_headers, customer):
    contact = _contact(client, auth_headers, customer["id"]).json()["data"]

    assert client.get(
        f"/api/contacts/{contact['id']}", headers=other_tenant_headers
    ).status_code == 404
    assert client.get("/api/contacts", headers=other_tenant_headers).json()["data"] == []
