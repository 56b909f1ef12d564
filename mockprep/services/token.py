"""Bearer tokens identifying the interview candidate (HS256 JWT)."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError

from mockprep.config.settings import settings


def create_token(
    user_id: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a token whose ``sub`` claim is the user id.

    Args:
        user_id: Principal that owns sessions, answers and reports
        email: Optional email claim
        expires_delta: Lifetime; ACCESS_TOKEN_EXPIRE_MINUTES when omitted

    Returns:
        Encoded JWT token string
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims: dict[str, Any] = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    if email:
        claims["email"] = email

    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        JWTError: If the token is invalid, expired or has no subject
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except JWTError as e:
        raise JWTError(f"Invalid token: {e}")

    if not claims.get("sub"):
        raise JWTError("Token has no subject")
    return claims
