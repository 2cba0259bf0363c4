"""Bearer token helpers for the admin client"""

from datetime import datetime, timezone
from typing import Optional

from jose import jwt, JWTError


def decode_token(token: Optional[str]) -> Optional[dict]:
    """
    Read the claims of a JWT without verifying its signature.

    The client never holds the signing secret; the server verifies. This is
    only used to avoid sending requests with a token that has already expired.

    Args:
        token: JWT token string

    Returns:
        Claims dictionary or None if the token cannot be decoded
    """
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None


def _now_timestamp() -> int:
    return int(datetime.now(timezone.utc).timestamp())


def is_token_expired(token: Optional[str]) -> bool:
    """
    Check if a token is expired

    Returns:
        True if the token is expired or cannot be decoded, False otherwise
    """
    claims = decode_token(token)
    if claims is None:
        return True

    exp = claims.get("exp")
    if exp is None:
        return False
    return int(exp) < _now_timestamp()


def get_token_remaining_time(token: Optional[str]) -> int:
    """
    Seconds until the token expires

    Returns:
        Remaining seconds, or 0 if expired or invalid
    """
    claims = decode_token(token)
    if not claims or claims.get("exp") is None:
        return 0
    return max(0, int(claims["exp"]) - _now_timestamp())
