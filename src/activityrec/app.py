from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from activityrec.config import Config
from activityrec.core.core import Core
from activityrec.core.modules.recording.models import RecordingView
from activityrec.core.modules.session.models import AuthToken
from activityrec.core.modules.user.models import AuthResult, UserView
from activityrec.errors import AuthenticationError


class App:
    """Facade for all application operations, checks identity before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        """Check if authentication token is valid."""
        return self._core.services.session.is_auth_token_valid(auth_token)

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create account and issue a token for it."""
        user = await self._core.services.user.create_user(name, email, password)
        token = self._core.services.session.create_token(user)
        return AuthResult(token=token, user=UserView.from_domain(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email and password and issue a new token."""
        user = await self._core.services.user.authenticate(email, password)
        if user is None:
            raise AuthenticationError("Invalid email or password")
        token = self._core.services.session.create_token(user)
        return AuthResult(token=token, user=UserView.from_domain(user))

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        """Get current authenticated user profile."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        user = await self._core.services.user.get_user(user_id)
        return UserView.from_domain(user)

    async def upload_recording(
        self, auth_token: AuthToken, filename: str | None, content: bytes, mime_type: str | None
    ) -> RecordingView:
        """Store a recording for the current user."""
        user_id = await self._core.services.access.ensure_authenticated(auth_token)
        recording = await self._core.services.recording.create_recording(user_id, filename, content, mime_type)
        return RecordingView.from_domain(recording)

    async def get_user_recordings(self, auth_token: AuthToken, user_id: int) -> list[RecordingView]:
        """List recordings of a user, newest first (owner only)."""
        current_user_id = await self._core.services.access.ensure_authenticated(auth_token)
        recordings = await self._core.services.recording.list_recordings(current_user_id, user_id)
        return [RecordingView.from_domain(recording) for recording in recordings]

    async def delete_recording(self, auth_token: AuthToken, recording_id: int) -> None:
        """Delete a recording and its blob (owner only)."""
        current_user_id = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.recording.delete_recording(current_user_id, recording_id)
