"""Google OAuth2 authorization-code flow."""

import logging
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from blog.config import Settings
from blog.errors import OAuthExchangeError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"  # noqa: S105
USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
SCOPES = [
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]


class GoogleUserInfo(BaseModel):
    """Profile claims returned by the userinfo endpoint."""

    id: str
    email: str
    name: str = ""
    picture: str | None = None
    verified_email: bool = False


class GoogleOAuthClient:
    """Client for exchanging Google authorization codes."""

    def __init__(
        self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self.client_id = settings.google_client_id
        self.client_secret = settings.google_client_secret
        self.redirect_uri = settings.google_redirect_uri
        self.timeout = 10.0
        self.transport = transport

    def authorization_url(self, state: str) -> str:
        """Build the consent screen URL the browser is redirected to."""
        params = {
            "client_id": self.client_id or "",
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "access_type": "offline",
            "state": state,
        }
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_user_info(self, code: str) -> GoogleUserInfo:
        """Exchange an authorization code and fetch the user's profile."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                token_response = await client.post(
                    TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "redirect_uri": self.redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                userinfo_response = await client.get(
                    USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                userinfo_response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"HTTP error during Google code exchange: {e}")
                raise OAuthExchangeError(f"Code exchange failed: {e}") from e
            except KeyError as e:
                raise OAuthExchangeError("Token response had no access_token") from e

        return GoogleUserInfo.model_validate(userinfo_response.json())
