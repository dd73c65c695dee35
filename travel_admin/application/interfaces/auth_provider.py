"""Abstract interface (port) for the authentication provider."""

from abc import ABC, abstractmethod

from travel_admin.domain.entities import Actor


class AuthProvider(ABC):
    """Port for credential exchange and account management.

    Implementations raise ``AuthProviderError`` carrying the provider's error
    code when a request is rejected.
    """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Actor:
        """Exchange credentials for a signed-in actor (with tokens)."""
        ...

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> Actor:
        """Create a new account and return it signed in."""
        ...

    @abstractmethod
    async def sign_out(self, actor: Actor) -> None:
        """Invalidate the actor's local credentials."""
        ...

    @abstractmethod
    async def send_password_reset(self, email: str) -> None:
        """Send a password-reset email."""
        ...

    @abstractmethod
    async def reauthenticate(self, email: str, password: str) -> Actor:
        """Re-verify credentials for a sensitive operation."""
        ...

    @abstractmethod
    async def refresh(self, refresh_token: str) -> Actor:
        """Restore a session from a long-lived refresh token."""
        ...

    @abstractmethod
    async def update_profile(self, actor: Actor, display_name: str) -> Actor:
        """Change the actor's display name."""
        ...

    @abstractmethod
    async def delete_account(self, actor: Actor) -> None:
        """Permanently delete the actor's account."""
        ...
