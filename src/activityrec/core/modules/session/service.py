from activityrec.core.core import Service
from activityrec.core.modules.session.models import AuthToken
from activityrec.core.modules.session.tokens import issue_token, verify_token
from activityrec.core.modules.user.models import User
from activityrec.errors import AuthenticationError


class SessionService(Service):
    """Issues and verifies stateless bearer tokens."""

    def create_token(self, user: User) -> AuthToken:
        config = self.core.config
        return issue_token(user.id, user.email, config.jwt_secret, config.jwt_expires_in)

    def get_authenticated_user_id(self, auth_token: AuthToken | None) -> int:
        return verify_token(auth_token, self.core.config.jwt_secret).user_id

    def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        try:
            self.get_authenticated_user_id(auth_token)
        except AuthenticationError:
            return False
        return True
