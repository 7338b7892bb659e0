from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from settings.config import get_settings

NONCE_AUDIENCE = "team-roster-nonce"
GOAL_UPDATES_ACTION = "goal_updates"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def verify_token(token: str, expected_token_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Verify a JWT's signature, expiration, issuer, and audience.
    Optionally enforce token type (e.g., 'access').
    Returns decoded claims on success; raises JWTError on failure.
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options={"require_exp": True, "require_sub": True, "require_iat": True, "require_nbf": True},
    )
    if expected_token_type and payload.get("type") != expected_token_type:
        raise JWTError("Invalid token type.")
    return payload


# Request-authenticity tokens (separate secret and audience)
def create_nonce_token(identity_id: int, action: str = GOAL_UPDATES_ACTION, expires_minutes: Optional[int] = None) -> str:
    """
    Create a short-lived token that the rendered roster hands to the client
    for follow-up requests. Minted for the authenticated caller and bound to an
    action so it cannot be replayed elsewhere.
    """
    settings = get_settings()
    now = _utcnow()
    minutes = expires_minutes if expires_minutes is not None else settings.NONCE_TOKEN_EXPIRE_MINUTES
    payload: Dict[str, Any] = {
        "sub": str(identity_id),
        "action": action,
        "iat": int(now.timestamp()),
        "nbf": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
        "iss": settings.JWT_ISSUER,
        "aud": NONCE_AUDIENCE,
        "type": "nonce",
    }
    return jwt.encode(payload, settings.NONCE_TOKEN_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_nonce_token(token: Optional[str], action: str = GOAL_UPDATES_ACTION) -> bool:
    """
    Check a request-authenticity token. Never raises: any problem is a failed check.
    """
    if not token:
        return False
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.NONCE_TOKEN_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=NONCE_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require_exp": True, "require_iat": True, "require_nbf": True},
        )
    except JWTError:
        return False
    return payload.get("type") == "nonce" and payload.get("action") == action
