"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap implementations:
- GoogleIdentityProvider when Google OAuth credentials are configured
- FakeIdentityProvider for development and testing
"""

from storefront.auth.identity.fake_adapter import FakeIdentityProvider
from storefront.auth.identity.port import IdentityProvider
from storefront.config import get_settings

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    """Return the current identity provider, choosing one from settings on first use."""
    global _current_provider
    if _current_provider is None:
        settings = get_settings()
        if settings.google_configured:
            from storefront.auth.identity.google_adapter import GoogleIdentityProvider

            _current_provider = GoogleIdentityProvider(
                client_id=settings.google_client_id,
                client_secret=settings.google_client_secret,
                callback_url=settings.google_callback_url,
            )
        else:
            _current_provider = FakeIdentityProvider()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    """Reset to default identity provider."""
    global _current_provider
    _current_provider = None
