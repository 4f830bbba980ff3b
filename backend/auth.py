"""
Authentication helpers: access tokens, password hashing and QR login payloads.

Access tokens are HS256 JWTs carrying the account ID in ``sub``. Passwords
are hashed with bcrypt. QR login payloads are compact JSON strings the
client renders as a QR code and sends back to /auth/login/qr.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import bcrypt
import jwt

from application.exceptions import AuthenticationError, ValidationError
from backend.settings import Settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


# ============================================================================
# Passwords
# ============================================================================

def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plain-text password with a fresh bcrypt salt."""
    truncated = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    hashed = bcrypt.hashpw(truncated, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    if not hashed:
        return False
    truncated = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(truncated, hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ============================================================================
# Access Tokens
# ============================================================================

def create_access_token(
    account_id: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> Tuple[str, datetime]:
    """
    Issue an access token for an account.

    Args:
        account_id: The account the token authenticates
        settings: Signing configuration
        now: Issue time (defaults to the current UTC time)

    Returns:
        Tuple of (jwt_token, expiry_datetime)
    """
    now = now or datetime.now(timezone.utc)
    expiry = now + timedelta(days=settings.jwt_expire_days)

    payload = {
        "sub": account_id,
        "iat": int(now.timestamp()),
        "exp": int(expiry.timestamp()),
        "iss": settings.jwt_issuer,
    }

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, expiry


def decode_access_token(token: str, settings: Settings) -> str:
    """
    Validate an access token and return the account ID it carries.

    Raises:
        AuthenticationError: If the token is expired, malformed or unsigned by us
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid access token: {e}")
        raise AuthenticationError("Invalid token")

    account_id = payload.get("sub")
    if not account_id:
        raise AuthenticationError("Token missing user ID")
    return account_id


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationError: If the header is missing or malformed
    """
    if not authorization:
        raise AuthenticationError("Access token required")
    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("Access token required")
    return token


# ============================================================================
# QR Login
# ============================================================================

def generate_qr_data(account_id: str, username: str, now: Optional[datetime] = None) -> str:
    """
    Build the QR login payload for an account.

    The timestamp is in milliseconds since the epoch.

    Returns:
        JSON string for the QR code
    """
    now = now or datetime.now(timezone.utc)
    qr_data = {
        "user_id": account_id,
        "username": username,
        "timestamp": int(now.timestamp() * 1000),
    }
    return json.dumps(qr_data, separators=(",", ":"))


def parse_qr_data(
    qr_data: str,
    max_age_seconds: int,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Parse and age-check a QR login payload.

    Raises:
        ValidationError: If the payload is not valid JSON, lacks fields or is too old
    """
    try:
        parsed = json.loads(qr_data)
    except (TypeError, ValueError):
        raise ValidationError("Invalid QR code")

    if not isinstance(parsed, dict) or not parsed.get("user_id"):
        raise ValidationError("Invalid QR code")

    timestamp = parsed.get("timestamp")
    if not isinstance(timestamp, (int, float)):
        raise ValidationError("Invalid QR code")

    now = now or datetime.now(timezone.utc)
    age_ms = now.timestamp() * 1000 - timestamp
    if age_ms > max_age_seconds * 1000:
        raise ValidationError("QR code expired")

    return parsed
