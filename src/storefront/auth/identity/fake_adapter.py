"""Configurable fake identity provider for development and testing.

Every code except the ones marked as rejected signs in ``profile``.
"""

from urllib.parse import urlencode

from storefront.auth.identity.port import GoogleProfile, IdentityProvider, IdentityProviderError


class FakeIdentityProvider(IdentityProvider):
    def __init__(self, profile: GoogleProfile | None = None) -> None:
        self.profile = profile or GoogleProfile(
            google_id="fake-google-id",
            email="shopper@example.com",
            name="Fake Shopper",
            avatar="https://images.example.com/avatar.png",
        )
        self.rejected_codes: set[str] = set()
        self.calls: list[dict] = []

    def authorization_url(self, state: str | None = None) -> str:
        query = {"client_id": "fake-client"}
        if state:
            query["state"] = state
        return f"https://accounts.example.com/o/oauth2/auth?{urlencode(query)}"

    async def exchange(self, code: str) -> GoogleProfile:
        self.calls.append({"method": "exchange", "code": code})
        if code in self.rejected_codes:
            raise IdentityProviderError(f"Authorization code {code!r} was rejected")
        return self.profile
