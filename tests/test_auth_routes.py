# tests/test_auth_routes.py
from urllib.parse import parse_qs, urlparse


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def _login(client, email="viewer@acme.com", password="secret123"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def _activity_total(client, headers, code):
    return client.get(f"/api/activities?code={code}", headers=headers).json()["data"]["total"]


# =========================
# SIGNUP
# =========================
def test_signup_creates_operator_in_default_tenant(client, auth_headers):
    r = client.post(
        "/api/auth/signup",
        json={
            "email": "new.hire@acme.com",
            "password": "hunter22",
            "first_name": "Nora",
            "last_name": "Hire",
        },
    )
    assert r.status_code == 201
    body = r.json()
    assert body["data"]["user"]["email"] == "new.hire@acme.com"
    assert body["data"]["session"] is None

    listed = client.get("/api/users", headers=auth_headers).json()["data"]
    created = next(u for u in listed if u["email"] == "new.hire@acme.com")
    assert created["role"] == "Staff User"
    assert created["username"] == "nora.hire"
    assert _activity_total(client, auth_headers, "SIGNUP") == 1


def test_signup_links_existing_local_user(client, auth_headers):
    client.post(
        "/api/users",
        json={
            "email": "sam@acme.com",
            "first_name": "Sam",
            "last_name": "Stock",
            "role": "Warehouse Manager",
        },
        headers=auth_headers,
    )
    r = client.post(
        "/api/auth/signup",
        json={"email": "sam@acme.com", "password": "hunter22", "first_name": "S", "last_name": "S"},
    )
    assert r.status_code == 201

    stats = client.get("/api/users/stats", headers=auth_headers).json()["data"]
    assert stats["totalUsers"] == 3

    login = _login(client, "sam@acme.com", "hunter22")
    assert login.status_code == 200
    token = login.json()["data"]["session"]["access_token"]
    me = client.get("/api/auth/me", headers=_bearer(token)).json()["data"]
    assert me["local_user"]["role"] == "Warehouse Manager"


def test_signup_rejects_linked_email(client):
    r = client.post(
        "/api/auth/signup",
        json={"email": "admin@acme.com", "password": "hunter22", "first_name": "A", "last_name": "B"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "User with this email already exists"


def test_signup_short_password(client):
    r = client.post(
        "/api/auth/signup",
        json={"email": "x@acme.com", "password": "123", "first_name": "A", "last_name": "B"},
    )
    assert r.status_code == 400
    assert r.json()["error_code"] == "VALIDATION_ERROR"


# =========================
# LOGIN / LOGOUT
# =========================
def test_login_returns_session_and_records_login(client, auth_headers, seeded):
    r = _login(client)
    assert r.status_code == 200
    session = r.json()["data"]["session"]
    assert session["token_type"] == "bearer"
    assert session["refresh_token"]

    viewer = client.get(f"/api/users/{seeded['viewer_id']}", headers=auth_headers).json()["data"]
    assert viewer["last_login"] is not None
    assert _activity_total(client, auth_headers, "login") == 1


def test_login_bad_password(client):
    r = _login(client, password="wrong-password")
    assert r.status_code == 401
    assert r.json()["error"] == "Invalid login credentials"
    assert r.json()["error_code"] == "INVALID_CREDENTIALS"


def test_login_without_local_user(client, identity):
    identity.add_user("ghost@acme.com", password="boo12345")
    r = _login(client, "ghost@acme.com", "boo12345")
    assert r.status_code == 401
    assert r.json()["error"] == "User not found or inactive"


def test_login_inactive_user(client, auth_headers, seeded):
    client.put(
        f"/api/users/{seeded['viewer_id']}", json={"is_active": False}, headers=auth_headers
    )
    r = _login(client)
    assert r.status_code == 401


def test_logout_revokes_token(client, identity):
    token = _login(client).json()["data"]["session"]["access_token"]

    r = client.post("/api/auth/logout", headers=_bearer(token))
    assert r.status_code == 200
    assert identity.signed_out == [token]
    assert client.get("/api/auth/me", headers=_bearer(token)).status_code == 401


# =========================
# ME / PROFILE
# =========================
def test_me_returns_identity_local_user_and_tenant(client, auth_headers):
    r = client.get("/api/auth/me", headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["user"]["email"] == "admin@acme.com"
    assert data["local_user"]["role"] == "Tenant Super Admin"
    assert data["tenant"]["slug"] == "default"
    assert data["tenant"]["name"] == "Acme Logistics"


def test_profile(client, identity):
    provider_user = identity.add_user(
        "pat@acme.com",
        password="pat12345",
        metadata={"full_name": "Pat Picker", "avatar_url": "https://img.acme.com/pat.png"},
    )
    r = client.get("/api/auth/profile", headers=_bearer(identity.issue_token(provider_user["id"])))
    # no local row yet
    assert r.status_code == 401

    r = client.get("/api/auth/profile", headers=_bearer(_login(client).json()["data"]["session"]["access_token"]))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["email"] == "viewer@acme.com"
    assert data["provider"] == "email"
    assert data["full_name"] is None


# =========================
# OAUTH
# =========================
def test_oauth_url_uses_pkce(client):
    r = client.post("/api/auth/oauth/google", json={"redirect_to": "https://app.acme.com/cb"})
    assert r.status_code == 200
    data = r.json()["data"]
    url = urlparse(data["url"])
    query = parse_qs(url.query)

    assert url.path == "/auth/v1/authorize"
    assert query["provider"] == ["google"]
    assert query["redirect_to"] == ["https://app.acme.com/cb"]
    assert query["code_challenge_method"] == ["s256"]
    assert query["code_challenge"][0] != data["code_verifier"]
    assert len(data["code_verifier"]) >= 43


def test_oauth_url_azure_scopes_and_default_redirect(client):
    r = client.post("/api/auth/oauth/azure")
    query = parse_qs(urlparse(r.json()["data"]["url"]).query)
    assert "User.Read" in query["scopes"][0]
    assert query["redirect_to"][0].endswith("/auth/callback")


def test_oauth_unsupported_provider(client):
    r = client.post("/api/auth/oauth/github")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid OAuth provider. Supported providers: azure, google"


def test_oauth_callback_provisions_operator(client, identity):
    provider_user = identity.add_user(
        "nia@acme.com", metadata={"full_name": "Nia Newbie"}, provider="google"
    )
    identity.add_oauth_code("code-1", provider_user["id"])

    r = client.post(
        "/api/auth/oauth/callback",
        json={"code": "code-1", "provider": "google", "code_verifier": "verifier"},
    )
    assert r.status_code == 200
    token = r.json()["data"]["session"]["access_token"]

    me = client.get("/api/auth/me", headers=_bearer(token)).json()["data"]
    assert me["local_user"]["first_name"] == "Nia"
    assert me["local_user"]["last_name"] == "Newbie"
    assert me["local_user"]["role"] == "Staff User"
    assert me["tenant"]["slug"] == "default"


def test_oauth_callback_links_existing_user(client, auth_headers, identity):
    client.post(
        "/api/users",
        json={"email": "sam@acme.com", "first_name": "Sam", "last_name": "Stock", "role": "manager"},
        headers=auth_headers,
    )
    provider_user = identity.add_user("sam@acme.com", provider="azure")
    identity.add_oauth_code("code-2", provider_user["id"])

    r = client.post(
        "/api/auth/oauth/callback",
        json={"code": "code-2", "provider": "azure", "code_verifier": "verifier"},
    )
    assert r.status_code == 200
    assert _activity_total(client, auth_headers, "LINK_IDENTITY") == 1
    assert client.get("/api/users/stats", headers=auth_headers).json()["data"]["totalUsers"] == 3


def test_oauth_callback_bad_code(client):
    r = client.post(
        "/api/auth/oauth/callback",
        json={"code": "nope", "provider": "google", "code_verifier": "verifier"},
    )
    assert r.status_code == 401


# =========================
# REFRESH
# =========================
def test_refresh_rotates_tokens(client):
    session = _login(client).json()["data"]["session"]

    r = client.post("/api/auth/refresh", json={"refresh_token": session["refresh_token"]})
    assert r.status_code == 200
    fresh = r.json()["data"]["session"]
    assert fresh["access_token"] != session["access_token"]

    reused = client.post("/api/auth/refresh", json={"refresh_token": session["refresh_token"]})
    assert reused.status_code == 401
    assert reused.json()["error_code"] == "TOKEN_INVALID"
