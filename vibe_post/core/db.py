import json
from typing import Dict, Optional
import aiohttp
from .errors import StorageError
from .token_store import TokenStore
from ..models.post_models import UserToken
from ..utils.logger import get_logger

logger = get_logger(__name__)

TOKEN_COLUMNS = "user_id,provider,encrypted_token,github_user_id"


class SupabaseTokenStore(TokenStore):
    """Token store backed by a Supabase table through its PostgREST API."""

    def __init__(self, url: str, service_key: str, table: str = "user_tokens"):
        self.table_url = f"{url.rstrip('/')}/rest/v1/{table}"
        self._service_key = service_key

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
            "Accept": "application/json",
        }
        headers.update(extra)
        return headers

    @staticmethod
    async def _raise_for_error(response: aiohttp.ClientResponse) -> None:
        if response.status < 400:
            return
        response_text = await response.text()
        try:
            body = json.loads(response_text)
            message = body.get("message") or response_text
            code = body.get("code")
        except (json.JSONDecodeError, AttributeError):
            message = response_text or f"HTTP {response.status}"
            code = None
        logger.error(f"Supabase request failed. Status: {response.status}, Code: {code}, Message: {message}")
        raise StorageError(message, code=code)

    async def upsert(self, record: UserToken) -> None:
        """Upsert on the (user_id, provider) unique constraint."""
        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.table_url,
                params={"on_conflict": "user_id,provider"},
                json=record.model_dump(),
                headers=self._headers(Prefer="resolution=merge-duplicates,return=minimal"),
            ) as response:
                await self._raise_for_error(response)
                logger.debug(f"Upserted {record.provider} token for user {record.user_id}")

    async def select_one(self, user_id: str, provider: str) -> Optional[UserToken]:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                self.table_url,
                params={
                    "select": TOKEN_COLUMNS,
                    "user_id": f"eq.{user_id}",
                    "provider": f"eq.{provider}",
                },
                headers=self._headers(),
            ) as response:
                await self._raise_for_error(response)
                rows = await response.json()

        if not rows:
            logger.debug(f"No {provider} token row for user {user_id}")
            return None
        if len(rows) > 1:
            raise StorageError(f"Expected one token row for user {user_id}, found {len(rows)}")
        return UserToken(**rows[0])
