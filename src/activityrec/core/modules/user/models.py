from datetime import datetime

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from activityrec.core.db import Base
from activityrec.utils import now


class User(Base):
    """User account with credentials."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=now)

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"


class UserView(BaseModel):
    """User account information (API representation)."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address used to log in")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResult(BaseModel):
    """Token issued for a user together with the user's public summary."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    user: UserView
