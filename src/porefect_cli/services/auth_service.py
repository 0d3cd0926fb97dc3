"""Service for building the signed-in user's session."""

from __future__ import annotations

from porefect_cli.config import ConfigManager
from porefect_cli.models import UserSession


class AuthService:
    """Reads and writes the saved identity for a profile.

    Sign-in itself happens with the external identity provider; the CLI only
    keeps the resulting user id and bearer token.
    """

    def __init__(self, config_manager: ConfigManager):
        self.config_manager = config_manager

    def current_session(self) -> UserSession | None:
        """Return the saved session, or None when nobody is signed in."""
        credentials = self.config_manager.load_credentials()
        if not credentials or not credentials.get("user_id"):
            return None
        return UserSession(
            user_id=credentials["user_id"], token=credentials.get("token")
        )

    def is_authenticated(self) -> bool:
        """Check if a user is signed in."""
        return self.current_session() is not None

    def login(self, user_id: str, token: str | None = None) -> UserSession:
        """Save a session obtained from the identity provider."""
        session = UserSession(user_id=user_id, token=token)
        self.config_manager.save_credentials(session.user_id, session.token)
        return session

    def logout(self) -> None:
        """Forget the saved session."""
        self.config_manager.clear_credentials()
