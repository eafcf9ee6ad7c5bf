from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple
from ..models.post_models import UserToken
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TokenStore(ABC):
    """Per-user encrypted OAuth token storage."""

    @abstractmethod
    async def upsert(self, record: UserToken) -> None:
        """
        Insert or overwrite the token row for (user_id, provider).

        Raises:
            StorageError: the datastore rejected the write
        """
        pass

    @abstractmethod
    async def select_one(self, user_id: str, provider: str) -> Optional[UserToken]:
        """
        Get the token row for (user_id, provider).

        Returns:
            The stored row, or None when there is none

        Raises:
            StorageError: the datastore read failed
        """
        pass


class InMemoryTokenStore(TokenStore):
    """Dictionary-backed token store for local runs and tests."""

    def __init__(self):
        self._rows: Dict[Tuple[str, str], UserToken] = {}

    async def upsert(self, record: UserToken) -> None:
        self._rows[(record.user_id, record.provider)] = record
        logger.debug(f"Stored {record.provider} token for user {record.user_id} in memory")

    async def select_one(self, user_id: str, provider: str) -> Optional[UserToken]:
        return self._rows.get((user_id, provider))

    def __len__(self) -> int:
        return len(self._rows)
