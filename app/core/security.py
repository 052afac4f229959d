# app/core/security.py

from jose import jwt, JWTError

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.core.config import (
    SUPABASE_JWT_SECRET,
    JWT_ALGORITHM,
    JWT_AUDIENCE,
)

# =====================================================
# BEARER HEADER
# =====================================================
def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None

# =====================================================
# DECODE + VALIDATE PROVIDER TOKEN
# =====================================================
def decode_access_token(token: str, secret: str | None = None) -> dict:
    """Verify a Supabase-issued access token with the project's JWT secret.

    Only used when SUPABASE_JWT_SECRET is configured; otherwise tokens are
    validated by asking the identity provider.
    """
    secret = secret or SUPABASE_JWT_SECRET
    if not secret:
        raise RuntimeError("SUPABASE_JWT_SECRET is not configured")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
        )
    except JWTError:
        raise AppException(401, "Invalid or expired token", ErrorCode.TOKEN_INVALID)

    if not payload.get("sub"):
        raise AppException(401, "Invalid or expired token", ErrorCode.TOKEN_INVALID)

    return payload


def identity_from_claims(payload: dict) -> dict:
    """Shape local JWT claims like the provider's /user response."""
    return {
        "id": payload["sub"],
        "email": payload.get("email"),
        "role": payload.get("role"),
        "app_metadata": payload.get("app_metadata") or {},
        "user_metadata": payload.get("user_metadata") or {},
    }
