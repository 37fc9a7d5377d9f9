import asyncio

import structlog
from sqlalchemy import delete, select

from activityrec.core.core import Service
from activityrec.core.modules.recording.models import Recording
from activityrec.core.modules.recording.utils import generate_storage_key, get_extension, normalize_mime_type
from activityrec.errors import NotFoundError, PayloadTooLargeError, UnsupportedMediaTypeError, ValidationError

logger = structlog.get_logger(__name__)

# Attempts at finding a free storage key before giving up
MAX_KEY_ATTEMPTS = 5


class RecordingService(Service):
    """Manages uploaded recordings: blob on disk plus metadata row."""

    async def get_recording(self, recording_id: int) -> Recording:
        """Get recording by ID.

        Raises:
            NotFoundError: If recording not found
        """
        async with self.database.session() as session:
            recording = await session.get(Recording, recording_id)
        if recording is None:
            raise NotFoundError("Recording not found")
        return recording

    async def create_recording(self, user_id: int, filename: str | None, content: bytes, mime_type: str | None) -> Recording:
        """Store an uploaded blob and record its metadata.

        The blob is written first. If the row insert then fails, the blob is
        removed again (best-effort) and the original error propagates.

        Args:
            user_id: Authenticated uploader
            filename: Original filename from the client, used only for its extension
            content: File content bytes
            mime_type: Content type as sent by the client

        Returns:
            Created recording

        Raises:
            UnsupportedMediaTypeError: If mime type is not allow-listed
            PayloadTooLargeError: If content exceeds the configured maximum
            ValidationError: If content is empty
        """
        config = self.core.config
        normalized = normalize_mime_type(mime_type)
        if normalized not in config.allowed_mime_types:
            raise UnsupportedMediaTypeError("Invalid file type. Only video/audio files are allowed.")
        if len(content) > config.max_upload_size:
            raise PayloadTooLargeError(f"File too large. Maximum size is {config.max_upload_size} bytes.")
        if not content:
            raise ValidationError("Uploaded file is empty")

        key = await self._write_blob(get_extension(filename, normalized), content)

        try:
            recording = await self._insert_recording(user_id, key)
        except Exception:
            await self._discard_blob(key)
            raise

        logger.debug("recording_created", recording_id=recording.id, user_id=user_id, filepath=key, size=len(content))
        return recording

    async def list_recordings(self, requesting_user_id: int, target_user_id: int) -> list[Recording]:
        """List recordings of target user, newest first. Only the owner may list.

        Raises:
            AccessDeniedError: If requesting user is not the target user
        """
        self.core.services.access.ensure_owner(
            requesting_user_id, target_user_id, "Unauthorized to access these recordings"
        )
        async with self.database.session() as session:
            result = await session.execute(
                select(Recording)
                .where(Recording.user_id == target_user_id)
                .order_by(Recording.created_at.desc(), Recording.id.desc())
            )
            return list(result.scalars().all())

    async def delete_recording(self, requesting_user_id: int, recording_id: int) -> None:
        """Delete recording blob, then its row. Only the owner may delete.

        A missing blob is tolerated. If another request deleted the row in the
        meantime, this one reports NotFoundError.

        Raises:
            NotFoundError: If recording not found
            AccessDeniedError: If requesting user is not the owner
        """
        recording = await self.get_recording(recording_id)
        self.core.services.access.ensure_owner(
            requesting_user_id, recording.user_id, "Unauthorized to delete this recording"
        )

        removed = await asyncio.to_thread(self.core.storage.delete, recording.filepath)
        if not removed:
            logger.warning("recording_blob_missing", recording_id=recording_id, filepath=recording.filepath)

        if await self._delete_row(recording_id) == 0:
            raise NotFoundError("Recording not found")
        logger.debug("recording_deleted", recording_id=recording_id, user_id=requesting_user_id)

    async def _write_blob(self, extension: str, content: bytes) -> str:
        for _ in range(MAX_KEY_ATTEMPTS):
            key = generate_storage_key(extension)
            try:
                await asyncio.to_thread(self.core.storage.write, key, content)
            except FileExistsError:
                logger.debug("storage_key_collision", filepath=key)
                continue
            return key
        raise RuntimeError("Could not allocate a unique storage key")

    async def _insert_recording(self, user_id: int, key: str) -> Recording:
        recording = Recording(user_id=user_id, filepath=key)
        async with self.database.session() as session:
            session.add(recording)
            await session.commit()
        return recording

    async def _delete_row(self, recording_id: int) -> int:
        """Delete the metadata row; returns the number of rows removed."""
        async with self.database.session() as session:
            result = await session.execute(delete(Recording).where(Recording.id == recording_id))
            deleted = result.rowcount
            await session.commit()
        return deleted

    async def _discard_blob(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.core.storage.delete, key)
        except OSError:
            logger.exception("orphaned_recording_blob", filepath=key)
        else:
            logger.warning("recording_insert_failed_blob_removed", filepath=key)
