"""Signed bearer token issuance and verification."""

import secrets
from datetime import UTC, datetime, timedelta

import jwt

from activityrec.core.modules.session.models import AuthToken, TokenClaims
from activityrec.errors import AuthenticationError
from activityrec.utils import now

ALGORITHM = "HS256"


def issue_token(
    user_id: int, email: str, secret: str, expires_in: timedelta, issued_at: datetime | None = None
) -> AuthToken:
    """Sign a token binding user_id and email to an expiry.

    A random jti makes every token unique, even two issued for the same
    user within the same second.
    """
    issued_at = issued_at or now()
    payload = {
        "userId": user_id,
        "email": email,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_in).timestamp()),
        "jti": secrets.token_hex(8),
    }
    return AuthToken(jwt.encode(payload, secret, algorithm=ALGORITHM))


def verify_token(auth_token: str | None, secret: str, at: datetime | None = None) -> TokenClaims:
    """Verify signature, shape and expiry of a token.

    Args:
        auth_token: Raw token from the Authorization header
        secret: Server signing secret
        at: Point in time to check expiry against (defaults to now)

    Returns:
        The verified claims

    Raises:
        AuthenticationError: If the token is absent, malformed, wrongly signed or expired
    """
    if not auth_token:
        raise AuthenticationError("Access token required")

    try:
        payload = jwt.decode(
            auth_token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "userId"], "verify_exp": False, "verify_iat": False},
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    user_id = payload["userId"]
    exp = payload["exp"]
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(exp, int | float):
        raise AuthenticationError("Invalid or expired token")

    expires_at = datetime.fromtimestamp(exp, UTC)
    if expires_at <= (at or now()):
        raise AuthenticationError("Invalid or expired token")

    return TokenClaims(user_id=user_id, email=str(payload.get("email", "")), expires_at=expires_at)
