from activityrec.core.core import Service
from activityrec.core.modules.session.models import AuthToken
from activityrec.errors import AccessDeniedError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> int:
        """Ensure the token is valid, return the authenticated user id."""
        return self.core.services.session.get_authenticated_user_id(auth_token)

    def ensure_owner(self, user_id: int, owner_id: int, message: str) -> None:
        """Ensure user_id is the owner, raise AccessDeniedError if not."""
        if user_id != owner_id:
            raise AccessDeniedError(message)
