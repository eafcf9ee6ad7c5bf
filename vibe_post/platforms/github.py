from typing import Any, Dict, List, Optional
import json
from urllib.parse import urlencode
import aiohttp
from ..core.errors import UpstreamError
from ..core.oauth_base import OAuthBase
from ..models.post_models import TokenExchange
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GitHubOAuth(OAuthBase):
    """GitHub OAuth App implementation."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        oauth_url: str = "https://github.com",
        api_url: str = "https://api.github.com",
        default_scopes: Optional[List[str]] = None,
    ):
        super().__init__(client_id, client_secret, callback_url)
        self.authorize_url = f"{oauth_url.rstrip('/')}/login/oauth/authorize"
        self.token_url = f"{oauth_url.rstrip('/')}/login/oauth/access_token"
        self.api_url = api_url.rstrip('/')
        self.default_scopes = default_scopes or ['read:user', 'user:email']

    def get_authorization_url(self, state: Optional[str] = None, scopes: Optional[List[str]] = None) -> str:
        """Get GitHub authorization URL."""
        params = {
            'client_id': self.client_id,
            'redirect_uri': self.callback_url,
            'scope': ' '.join(scopes or self.default_scopes),
            'state': state,
        }

        # Remove None values
        params = {k: v for k, v in params.items() if v is not None}
        return f"{self.authorize_url}?{urlencode(params)}"

    async def get_access_token(self, code: str) -> TokenExchange:
        """
        Exchange authorization code for access token.

        GitHub reports a rejected code with a 200 and an ``error`` field, so the
        caller decides success by the presence of ``access_token``.
        """
        logger.debug("Exchanging GitHub authorization code for access token")

        data = {
            "client_id": self.client_id,
            "client_secret": self._client_secret,
            "code": code,
            "redirect_uri": self.callback_url,
        }

        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.token_url,
                data=data,
                headers={
                    'Content-Type': 'application/x-www-form-urlencoded',
                    'Accept': 'application/json'
                }
            ) as response:
                logger.debug(f"Token response status: {response.status}")
                response_text = await response.text()
                return TokenExchange(status=response.status, payload=json.loads(response_text))

    async def get_user_profile(self, access_token: str) -> Dict[str, Any]:
        """Get the GitHub user profile of the token's owner."""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                f"{self.api_url}/user",
                headers=self._api_headers(access_token),
            ) as response:
                logger.debug(f"Profile request status: {response.status}")

                if not response.ok:
                    raise UpstreamError("Failed to fetch GitHub user profile", status=response.status)

                return json.loads(await response.text())

    async def get_user_events(self, access_token: str) -> Any:
        """Get the raw event feed of the token's owner."""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                f"{self.api_url}/user/events",
                headers=self._api_headers(access_token),
            ) as response:
                logger.debug(f"Events request status: {response.status}")

                if not response.ok:
                    raise UpstreamError("Failed to fetch GitHub activity", status=response.status)

                return json.loads(await response.text())

    @staticmethod
    def _api_headers(access_token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }
