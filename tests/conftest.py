# tests/conftest.py
import os
import tempfile
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# ---- Configure the app under test before it is imported
_DB_DIR = Path(tempfile.mkdtemp(prefix="vault_wms_tests_"))
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["SUPABASE_URL"] = "https://auth.acme.com"
os.environ["SUPABASE_ANON_KEY"] = "anon-test-key"
# empty value keeps load_dotenv from filling it in; tokens go through the fake provider
os.environ["SUPABASE_JWT_SECRET"] = ""
os.environ["DEFAULT_TENANT_SLUG"] = "default"

from main import app  # noqa: E402
from app.core.db import AsyncSessionLocal, init_models  # noqa: E402
from app.core.exceptions import IdentityProviderError  # noqa: E402
from app.core.identity import SupabaseAuthClient, get_identity_provider  # noqa: E402
from app.models.enums.user_role import UserRole  # noqa: E402
from app.models.tenancy.tenant_models import Tenant  # noqa: E402
from app.models.users.user_models import User  # noqa: E402


# ---- In-memory stand-in for the Supabase Auth API
class FakeIdentityProvider:
    def __init__(self):
        self._url_builder = SupabaseAuthClient("https://auth.acme.com", "anon-test-key")
        self.reset()

    def reset(self):
        self.users = {}  # provider id -> provider user
        self.passwords = {}  # email -> (password, provider id)
        self.tokens = {}  # access token -> provider id
        self.refresh_tokens = {}  # refresh token -> provider id
        self.codes = {}  # oauth code -> provider id
        self.signed_out = []

    # helpers used by tests
    def add_user(self, email, password=None, provider_id=None, metadata=None, provider="email"):
        provider_id = provider_id or str(uuid.uuid4())
        self.users[provider_id] = {
            "id": provider_id,
            "email": email,
            "user_metadata": metadata or {},
            "app_metadata": {"provider": provider},
            "created_at": "2026-01-05T10:00:00+00:00",
            "updated_at": "2026-01-05T10:00:00+00:00",
        }
        if password:
            self.passwords[email] = (password, provider_id)
        return self.users[provider_id]

    def issue_token(self, provider_id):
        token = f"access-{uuid.uuid4().hex}"
        self.tokens[token] = provider_id
        return token

    def add_oauth_code(self, code, provider_id):
        self.codes[code] = provider_id

    def _session(self, provider_id):
        token = self.issue_token(provider_id)
        refresh_token = f"refresh-{uuid.uuid4().hex}"
        self.refresh_tokens[refresh_token] = provider_id
        return {
            "access_token": token,
            "refresh_token": refresh_token,
            "token_type": "bearer",
            "expires_in": 3600,
            "expires_at": 1893456000,
            "user": self.users[provider_id],
        }

    # SupabaseAuthClient surface
    async def get_user(self, access_token):
        provider_id = self.tokens.get(access_token)
        if provider_id is None:
            raise IdentityProviderError("invalid JWT", 401)
        return self.users[provider_id]

    async def sign_up(self, email, password, metadata):
        if email in self.passwords:
            raise IdentityProviderError("User already registered", 422)
        user = self.add_user(email, password, metadata=metadata)
        return user

    async def sign_in_with_password(self, email, password):
        stored = self.passwords.get(email)
        if not stored or stored[0] != password:
            raise IdentityProviderError("Invalid login credentials", 400)
        return self._session(stored[1])

    async def refresh_session(self, refresh_token):
        provider_id = self.refresh_tokens.pop(refresh_token, None)
        if provider_id is None:
            raise IdentityProviderError("Invalid Refresh Token: Refresh Token Not Found", 400)
        return self._session(provider_id)

    async def sign_out(self, access_token):
        self.tokens.pop(access_token, None)
        self.signed_out.append(access_token)

    def oauth_url(self, provider, redirect_to):
        return self._url_builder.oauth_url(provider, redirect_to)

    async def exchange_code_for_session(self, code, code_verifier):
        provider_id = self.codes.pop(code, None)
        if provider_id is None or not code_verifier:
            raise IdentityProviderError("invalid flow state, no valid flow state found", 404)
        return self._session(provider_id)


# ---- Seed data
async def _seed(identity: FakeIdentityProvider) -> dict:
    async with AsyncSessionLocal() as session:
        acme = Tenant(name="Acme Logistics", slug="default")
        globex = Tenant(name="Globex Storage", slug="globex")
        session.add_all([acme, globex])
        await session.flush()

        seeded = {"tenant_id": acme.id, "other_tenant_id": globex.id}
        people = [
            ("admin", acme, "admin@acme.com", "Ada", "Admin", UserRole.admin),
            ("viewer", acme, "viewer@acme.com", "Vic", "Viewer", UserRole.viewer),
            ("other_admin", globex, "admin@globex.com", "Gus", "Globex", UserRole.admin),
        ]
        for key, tenant, email, first, last, role in people:
            provider_user = identity.add_user(email, password="secret123")
            user = User(
                tenant_id=tenant.id,
                supabase_user_id=provider_user["id"],
                email=email,
                first_name=first,
                last_name=last,
                role=role,
            )
            session.add(user)
            await session.flush()
            seeded[f"{key}_id"] = user.id
            seeded[f"{key}_token"] = identity.issue_token(provider_user["id"])

        await session.commit()
    return seeded


@pytest.fixture(scope="session")
def identity():
    return FakeIdentityProvider()


@pytest.fixture(scope="session")
def client(identity):
    app.dependency_overrides[get_identity_provider] = lambda: identity
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def seeded(client, identity):
    identity.reset()
    client.portal.call(init_models, True)
    return client.portal.call(_seed, identity)


@pytest.fixture
def run_async(client):
    """Run a coroutine function on the app's event loop."""

    def _run(fn, *args):
        return client.portal.call(fn, *args)

    return _run


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(seeded):
    return _bearer(seeded["admin_token"])


@pytest.fixture
def viewer_headers(seeded):
    return _bearer(seeded["viewer_token"])


@pytest.fixture
def other_tenant_headers(seeded):
    return _bearer(seeded["other_admin_token"])


# ---- Small factories shared by resource tests
@pytest.fixture
def make_warehouse(client):
    def _make(headers, code="WH-01", **overrides):
        body = {
            "name": f"Warehouse {code}",
            "warehouse_code": code,
            "address": {"city": "Austin", "state": "TX"},
            **overrides,
        }
        r = client.post("/api/warehouses", json=body, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def make_customer(client):
    def _make(headers, code="CUST-01", **overrides):
        body = {"name": f"Customer {code}", "customer_code": code, **overrides}
        r = client.post("/api/customers", json=body, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def make_item(client):
    def _make(headers, customer_id, code="ITEM-01", **overrides):
        body = {
            "customer_id": customer_id,
            "item_code": code,
            "name": f"Item {code}",
            **overrides,
        }
        r = client.post("/api/items", json=body, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make
