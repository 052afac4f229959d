# tests/test_identity_client.py
import pytest
import requests

from app.core import identity as identity_module
from app.core.exceptions import IdentityProviderError
from app.core.identity import SupabaseAuthClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self._body = body
        self.reason = reason
        self.content = b"" if body is None else b"{}"

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


@pytest.fixture
def sent(monkeypatch):
    calls = []
    replies = []

    def fake_request(method, url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def no_session(*args, **kwargs):
        raise AssertionError("requests.Session must not be shared across workers")

    monkeypatch.setattr(identity_module.requests, "request", fake_request)
    monkeypatch.setattr(identity_module.requests, "Session", no_session)
    return calls, replies


@pytest.fixture
def auth_client():
    return SupabaseAuthClient("https://auth.acme.com", "anon-test-key", timeout=3)


def test_get_user_sends_bearer_with_anon_apikey(run_async, sent, auth_client):
    calls, replies = sent
    replies.append(FakeResponse(body={"id": "provider-1", "email": "ada@acme.com"}))

    user = run_async(auth_client.get_user, "access-123")

    assert user["id"] == "provider-1"
    call = calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://auth.acme.com/auth/v1/user"
    assert call["headers"]["apikey"] == "anon-test-key"
    assert call["headers"]["Authorization"] == "Bearer access-123"
    assert call["timeout"] == 3


def test_password_grant_posts_credentials(run_async, sent, auth_client):
    calls, replies = sent
    replies.append(FakeResponse(body={"access_token": "a", "user": {"id": "p"}}))

    run_async(auth_client.sign_in_with_password, "ada@acme.com", "secret123")

    call = calls[0]
    assert call["url"].endswith("/auth/v1/token")
    assert call["params"] == {"grant_type": "password"}
    assert call["json"] == {"email": "ada@acme.com", "password": "secret123"}
    assert call["headers"]["Authorization"] == "Bearer anon-test-key"


def test_provider_error_keeps_status_and_message(run_async, sent, auth_client):
    _, replies = sent
    replies.append(
        FakeResponse(400, {"error_description": "Invalid login credentials"}, "Bad Request")
    )

    with pytest.raises(IdentityProviderError) as exc:
        run_async(auth_client.sign_in_with_password, "ada@acme.com", "nope")
    assert exc.value.status_code == 400
    assert exc.value.message == "Invalid login credentials"


def test_unreachable_provider_has_no_status(run_async, sent, auth_client):
    _, replies = sent
    replies.append(requests.ConnectionError("connection refused"))

    with pytest.raises(IdentityProviderError) as exc:
        run_async(auth_client.get_user, "access-123")
    assert exc.value.status_code is None


def test_logout_accepts_empty_body(run_async, sent, auth_client):
    calls, replies = sent
    replies.append(FakeResponse(204))

    assert run_async(auth_client.sign_out, "access-123") is None
    assert calls[0]["url"].endswith("/auth/v1/logout")


def test_client_has_no_admin_surface(auth_client):
    assert not hasattr(auth_client, "get_user_by_id")
    assert not hasattr(auth_client, "service_role_key")
