from datetime import UTC, datetime

from pydantic import BaseModel, Field
from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from activityrec.core.db import Base
from activityrec.utils import now


class Recording(Base):
    """Metadata for one uploaded media blob, owned by a user."""

    __tablename__ = "recordings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    filepath: Mapped[str] = mapped_column(String(500), nullable=False)  # storage key, not a full path
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=now)

    def __repr__(self) -> str:
        return f"<Recording {self.id} user={self.user_id} file={self.filepath}>"


class RecordingView(BaseModel):
    """Recording metadata (API representation)."""

    id: int = Field(..., description="Recording ID")
    user_id: int = Field(..., description="Owning user ID")
    filepath: str = Field(..., description="Storage key, served under /uploads/<filepath>")
    created_at: datetime = Field(..., description="Upload time")

    @classmethod
    def from_domain(cls, recording: Recording) -> "RecordingView":
        """Create view model from domain model."""
        created_at = recording.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; timestamps are always written in UTC
            created_at = created_at.replace(tzinfo=UTC)
        return cls(id=recording.id, user_id=recording.user_id, filepath=recording.filepath, created_at=created_at)
