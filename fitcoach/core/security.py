from datetime import datetime, timezone
from typing import Any, Dict, Optional
import secrets

from jose import JWTError, jwt

from fitcoach.core.config import settings


class ServiceAuthError(Exception):
    """Missing or invalid credential on a service-triggered endpoint."""
    pass


# =====================================================
# User Access Tokens
# =====================================================
def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a user access token issued by the auth provider.

    Returns the payload if the signature and expiry are valid, else None.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError:
        return None

    exp = payload.get("exp")
    if exp and datetime.now(timezone.utc).timestamp() > exp:
        return None

    if not payload.get("sub"):
        return None

    return payload


def create_access_token(subject: str, expires_at: datetime, **claims) -> str:
    """Issue a token in the auth provider's format (used by tooling and tests)."""
    to_encode = {
        "sub": str(subject),
        "exp": int(expires_at.timestamp()),
        "iat": int(datetime.now(timezone.utc).timestamp()),
        **claims,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# =====================================================
# Service Credential
# =====================================================
def verify_service_key(authorization: Optional[str]) -> None:
    """
    Check the bearer credential presented on trigger endpoints.

    Raises:
        ServiceAuthError: If the header is missing, malformed or wrong
    """
    if not settings.SERVICE_ROLE_KEY:
        raise ServiceAuthError("SERVICE_ROLE_KEY not configured")
    if not authorization:
        raise ServiceAuthError("No authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise ServiceAuthError("Invalid authorization header format")

    if not secrets.compare_digest(token.strip(), settings.SERVICE_ROLE_KEY):
        raise ServiceAuthError("Unauthorized")
