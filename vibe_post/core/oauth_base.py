from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from ..models.post_models import TokenExchange


class OAuthBase(ABC):
    """Base class for OAuth implementations."""

    def __init__(self, client_id: str, client_secret: str, callback_url: str):
        self.client_id = client_id
        self.callback_url = callback_url
        self._client_secret = client_secret

    @property
    def has_client_secret(self) -> bool:
        return bool(self._client_secret)

    @abstractmethod
    def get_authorization_url(self, state: Optional[str] = None, scopes: Optional[List[str]] = None) -> str:
        """Get the authorization URL for OAuth flow."""
        pass

    @abstractmethod
    async def get_access_token(self, code: str) -> TokenExchange:
        """Exchange authorization code for access token."""
        pass

    @abstractmethod
    async def get_user_profile(self, access_token: str) -> Dict[str, Any]:
        """Fetch the authenticated user's profile."""
        pass
