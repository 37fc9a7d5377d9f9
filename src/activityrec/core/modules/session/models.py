"""Session token models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel

AuthToken = NewType("AuthToken", str)


class TokenClaims(BaseModel):
    """Verified contents of a bearer token.

    Tokens are stateless: nothing about them is stored server-side, they
    stop working only when they expire or the client discards them.
    """

    user_id: int
    email: str
    expires_at: datetime
