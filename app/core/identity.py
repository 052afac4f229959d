# app/core/identity.py
"""Thin client for the Supabase Auth (GoTrue) REST API.

The backend never stores passwords or sessions; every credential flow is
forwarded here and only the local tenant-user lookup happens in our DB.
"""

import base64
import hashlib
import secrets
from functools import lru_cache
from urllib.parse import urlencode

import requests
from starlette.concurrency import run_in_threadpool

from app.core.config import (
    SUPABASE_URL,
    SUPABASE_ANON_KEY,
    IDENTITY_TIMEOUT_SECONDS,
)
from app.core.exceptions import IdentityProviderError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# =====================================================
# OAUTH PROVIDER SETTINGS
# =====================================================
OAUTH_PROVIDERS = {
    "azure": {
        # Microsoft Graph scopes; email must be asked for explicitly
        "scopes": "openid profile email User.Read",
        "query_params": {"tenant": "common", "prompt": "consent"},
    },
    "google": {
        "scopes": "openid profile email",
        "query_params": {"access_type": "offline", "prompt": "consent"},
    },
}


def generate_pkce_pair() -> tuple[str, str]:
    verifier = secrets.token_urlsafe(64)[:96]
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


class SupabaseAuthClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        timeout: float = 10.0,
    ):
        self.base_url = f"{base_url}/auth/v1"
        self.anon_key = anon_key
        self.timeout = timeout

    # =========================
    # LOW LEVEL
    # =========================
    def _headers(self, bearer: str | None = None) -> dict:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {bearer or self.anon_key}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: dict | None = None,
        bearer: str | None = None,
    ) -> dict:
        url = f"{self.base_url}{path}"
        # no shared Session: calls run on arbitrary threadpool workers
        try:
            response = requests.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(bearer),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error(
                "Identity provider unreachable",
                extra={"path": path, "error": str(exc)},
            )
            raise IdentityProviderError("Identity provider unavailable") from exc

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = (
                body.get("error_description")
                or body.get("msg")
                or body.get("message")
                or body.get("error")
                or response.reason
            )
            logger.info(
                "Identity provider rejected request",
                extra={"path": path, "status": response.status_code},
            )
            raise IdentityProviderError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def _call(self, method: str, path: str, **kwargs) -> dict:
        return await run_in_threadpool(self._request, method, path, **kwargs)

    # =========================
    # TOKENS / USERS
    # =========================
    async def get_user(self, access_token: str) -> dict:
        return await self._call("GET", "/user", bearer=access_token)

    async def sign_up(self, email: str, password: str, metadata: dict) -> dict:
        return await self._call(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata},
        )

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        return await self._call(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    async def refresh_session(self, refresh_token: str) -> dict:
        return await self._call(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    async def sign_out(self, access_token: str) -> None:
        await self._call("POST", "/logout", bearer=access_token)

    # =========================
    # OAUTH (PKCE)
    # =========================
    def oauth_url(self, provider: str, redirect_to: str) -> dict:
        settings = OAUTH_PROVIDERS.get(provider)
        if not settings:
            raise IdentityProviderError(f"Unsupported OAuth provider: {provider}")

        verifier, challenge = generate_pkce_pair()
        query = {
            "provider": provider,
            "redirect_to": redirect_to,
            "scopes": settings["scopes"],
            "code_challenge": challenge,
            "code_challenge_method": "s256",
            **settings["query_params"],
        }
        return {
            "url": f"{self.base_url}/authorize?{urlencode(query)}",
            "code_verifier": verifier,
        }

    async def exchange_code_for_session(self, code: str, code_verifier: str) -> dict:
        return await self._call(
            "POST",
            "/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier},
        )


@lru_cache
def get_identity_provider() -> SupabaseAuthClient:
    return SupabaseAuthClient(
        SUPABASE_URL,
        SUPABASE_ANON_KEY,
        timeout=IDENTITY_TIMEOUT_SECONDS,
    )
