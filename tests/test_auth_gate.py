# tests/test_auth_gate.py
import time

import pytest
from jose import jwt

import app.utils.get_user as auth_guard
from app.core.exceptions import AppException
from app.core.security import decode_access_token, extract_bearer_token, identity_from_claims


def test_missing_token_rejected(client):
    r = client.get("/api/warehouses")
    assert r.status_code == 401
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "No token provided"
    assert body["error_code"] == "TOKEN_MISSING"


def test_malformed_header_rejected(client, seeded):
    r = client.get("/api/warehouses", headers={"Authorization": seeded["admin_token"]})
    assert r.status_code == 401
    assert r.json()["error"] == "No token provided"


def test_unknown_token_rejected(client):
    r = client.get("/api/warehouses", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid or expired token"


def test_provider_user_without_local_row_rejected(client, identity):
    stranger = identity.add_user("stranger@acme.com", password="secret123")
    token = identity.issue_token(stranger["id"])

    r = client.get("/api/warehouses", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["error"] == "User not found or inactive"


def test_inactive_local_user_rejected(client, auth_headers, seeded):
    r = client.put(
        f"/api/users/{seeded['viewer_id']}",
        json={"status": "inactive"},
        headers=auth_headers,
    )
    assert r.status_code == 200

    r = client.get(
        "/api/warehouses",
        headers={"Authorization": f"Bearer {seeded['viewer_token']}"},
    )
    assert r.status_code == 401
    assert r.json()["error"] == "User not found or inactive"


def test_valid_token_passes(client, auth_headers):
    r = client.get("/api/warehouses", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "message": "Warehouses retrieved successfully",
        "data": [],
        "error": None,
    }


def test_viewer_can_read_but_not_write(client, viewer_headers):
    assert client.get("/api/warehouses", headers=viewer_headers).status_code == 200

    r = client.post(
        "/api/warehouses",
        json={"name": "Blocked", "warehouse_code": "WH-X"},
        headers=viewer_headers,
    )
    assert r.status_code == 403
    assert r.json()["error_code"] == "PERMISSION_DENIED"


def test_health_check_personalises_when_authenticated(client, auth_headers):
    anonymous = client.get("/")
    assert anonymous.status_code == 200
    assert anonymous.json()["authenticated"] is False

    # an invalid token is ignored rather than rejected
    bad = client.get("/", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 200
    assert bad.json()["authenticated"] is False

    assert client.get("/", headers=auth_headers).json()["authenticated"] is True


# =========================
# LOCAL JWT VERIFICATION
# =========================
def _signed(claims, secret="local-secret"):
    return jwt.encode(claims, secret, algorithm="HS256")


def test_local_jwt_decodes_to_provider_shape():
    token = _signed(
        {
            "sub": "provider-123",
            "email": "ada@acme.com",
            "aud": "authenticated",
            "exp": int(time.time()) + 60,
            "user_metadata": {"full_name": "Ada Admin"},
        }
    )
    identity = identity_from_claims(decode_access_token(token, secret="local-secret"))
    assert identity["id"] == "provider-123"
    assert identity["user_metadata"]["full_name"] == "Ada Admin"
    assert identity["app_metadata"] == {}


def test_local_jwt_rejects_wrong_secret_and_expiry():
    claims = {"sub": "provider-123", "aud": "authenticated", "exp": int(time.time()) + 60}
    with pytest.raises(AppException) as wrong_secret:
        decode_access_token(_signed(claims, "other-secret"), secret="local-secret")
    assert wrong_secret.value.status_code == 401
    assert wrong_secret.value.error_code == "TOKEN_INVALID"

    expired = dict(claims, exp=int(time.time()) - 60)
    with pytest.raises(AppException):
        decode_access_token(_signed(expired), secret="local-secret")


def test_bearer_extraction():
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token("Bearer   ") is None
    assert extract_bearer_token("Token abc") is None
    assert extract_bearer_token(None) is None


@pytest.fixture
def local_jwt(monkeypatch):
    monkeypatch.setattr(auth_guard, "SUPABASE_JWT_SECRET", "local-secret")


def _claims_for(identity, email):
    _, provider_id = identity.passwords[email]
    return {
        "sub": provider_id,
        "email": email,
        "aud": "authenticated",
        "exp": int(time.time()) + 60,
    }


def test_local_jwt_gate_accepts_signed_token(client, identity, local_jwt):
    token = _signed(_claims_for(identity, "admin@acme.com"))
    r = client.get("/api/warehouses", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200


def test_local_jwt_gate_rejects_bad_token(client, local_jwt):
    r = client.get("/api/warehouses", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid or expired token"
    assert r.json()["error_code"] == "TOKEN_INVALID"


def test_local_jwt_optional_user_ignores_bad_token(client, identity, local_jwt):
    r = client.get("/", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 200
    assert r.json()["authenticated"] is False

    token = _signed(_claims_for(identity, "admin@acme.com"))
    r = client.get("/", headers={"Authorization": f"Bearer {token}"})
    assert r.json()["authenticated"] is True
