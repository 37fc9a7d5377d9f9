import asyncio

import bcrypt
import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from activityrec.core.core import Service
from activityrec.core.db import Database
from activityrec.core.modules.user.models import User
from activityrec.core.modules.user.validators import validate_email, validate_name, validate_password
from activityrec.errors import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))


class UserService(Service):
    """Manages user accounts and password verification."""

    def __init__(self, database: Database) -> None:
        super().__init__(database)
        self._dummy_hash: str | None = None

    async def get_user(self, user_id: int) -> User:
        """Get user by ID."""
        async with self.database.session() as session:
            user = await session.get(User, user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by exact email match, or None."""
        async with self.database.session() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def has_email(self, email: str) -> bool:
        """Check if an account with this email exists."""
        async with self.database.session() as session:
            result = await session.execute(select(User.id).where(User.email == email))
            return result.first() is not None

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Create user with hashed password.

        Raises:
            ValidationError: If name, email or password are malformed
            ConflictError: If the email is already registered
        """
        validate_name(name)
        validate_email(email)
        validate_password(password)

        if await self.has_email(email):
            raise ConflictError("User with this email already exists")

        password_hash = await asyncio.to_thread(hash_password, password, self.core.config.bcrypt_rounds)
        user = User(name=name.strip(), email=email, password_hash=password_hash)

        async with self.database.session() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                # Lost a race against a concurrent registration with the same email
                await session.rollback()
                raise ConflictError("User with this email already exists") from e

        logger.debug("user_created", user_id=user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if the password matches, None otherwise.

        An unknown email is checked against a dummy hash so both failure
        paths take the same time.
        """
        user = await self.get_user_by_email(email)
        if user is None:
            await asyncio.to_thread(check_password, password, self._get_dummy_hash())
            return None
        if not await asyncio.to_thread(check_password, password, user.password_hash):
            return None
        return user

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("dummy-password", self.core.config.bcrypt_rounds)
        return self._dummy_hash

    async def on_start(self) -> None:
        """Precompute the dummy hash used for unknown-email logins."""
        self._dummy_hash = await asyncio.to_thread(hash_password, "dummy-password", self.core.config.bcrypt_rounds)
        logger.debug("user_service_started")
