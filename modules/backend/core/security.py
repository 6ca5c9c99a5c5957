"""
Security Utilities.

Bearer-token identity for the notes API. Tokens are JWTs whose ``sub``
claim carries the integer user id; everything past decoding that id
(login, sessions, user records) is outside this service.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from modules.backend.core.config import get_app_config, get_settings
from modules.backend.core.exceptions import AuthenticationError
from modules.backend.core.logging import get_logger
from modules.backend.core.utils import parse_int, utc_now

logger = get_logger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access", "aud": jwt_config.audience})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)


def create_user_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Create an access token identifying ``user_id``."""
    return create_access_token({"sub": str(user_id)}, expires_delta=expires_delta)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")


def user_id_from_token(token: str) -> int:
    """
    Resolve the user id carried by an access token.

    Raises:
        AuthenticationError: If the token is invalid, not an access token,
            or its subject is not an integer
    """
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise AuthenticationError("Invalid or expired token")

    user_id = parse_int(payload.get("sub"))
    if user_id is None:
        logger.warning("Token subject is not a user id", extra={"sub": payload.get("sub")})
        raise AuthenticationError("Invalid or expired token")
    return user_id
