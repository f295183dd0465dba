"""Google OAuth 2.0 adapter.

Runs the authorization-code flow against Google's endpoints with httpx and
reads the OpenID Connect userinfo document.
"""

from urllib.parse import urlencode

import httpx
import structlog

from storefront.auth.identity.port import GoogleProfile, IdentityProvider, IdentityProviderError

logger = structlog.get_logger(__name__)

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
USERINFO_ENDPOINT = "https://www.googleapis.com/oauth2/v3/userinfo"
SCOPES = "openid email profile"


class GoogleIdentityProvider(IdentityProvider):
    def __init__(self, client_id: str, client_secret: str, callback_url: str, timeout: float = 10.0) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self.timeout = timeout

    def authorization_url(self, state: str | None = None) -> str:
        query = {
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "response_type": "code",
            "scope": SCOPES,
            "access_type": "online",
            "prompt": "select_account",
        }
        if state:
            query["state"] = state
        return f"{AUTHORIZATION_ENDPOINT}?{urlencode(query)}"

    async def exchange(self, code: str) -> GoogleProfile:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                token_response = await client.post(
                    TOKEN_ENDPOINT,
                    data={
                        "code": code,
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "redirect_uri": self.callback_url,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                userinfo_response = await client.get(
                    USERINFO_ENDPOINT,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                userinfo_response.raise_for_status()
                info = userinfo_response.json()
            except (httpx.HTTPError, KeyError, ValueError) as exc:
                logger.warning("google_exchange_failed", error=str(exc))
                raise IdentityProviderError("Google sign-in failed") from exc

        if not info.get("email"):
            raise IdentityProviderError("Google profile has no email address")

        return GoogleProfile(
            google_id=info["sub"],
            email=info["email"],
            name=info.get("name"),
            avatar=info.get("picture"),
        )
