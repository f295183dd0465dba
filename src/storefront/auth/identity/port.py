"""OAuth identity provider port (abstract interface).

The auth endpoints only need two things from a provider: where to send the
browser, and who the user is once the provider redirects back with a code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GoogleProfile:
    google_id: str
    email: str
    name: str | None = None
    avatar: str | None = None


class IdentityProviderError(Exception):
    """The provider refused the authorization code or returned an unusable profile."""


class IdentityProvider(ABC):
    @abstractmethod
    def authorization_url(self, state: str | None = None) -> str:
        """URL of the provider's consent screen."""
        ...

    @abstractmethod
    async def exchange(self, code: str) -> GoogleProfile:
        """Trade an authorization code for the signed-in user's profile."""
        ...
