from fastapi import APIRouter, Depends, Request
from ..core.errors import ClientInputError, NotFoundError, ServerError, StorageError, VibePostError
from ..core.token_store import TokenStore
from ..models.post_models import GITHUB_PROVIDER
from ..platforms.github import GitHubOAuth
from ..utils.crypto import TokenCipher
from ..utils.logger import get_logger
from .dependencies import get_cipher, get_github_oauth, get_token_store

logger = get_logger(__name__)
github_router = APIRouter()


@github_router.get("/activity")
async def get_activity(
    request: Request,
    github: GitHubOAuth = Depends(get_github_oauth),
    token_store: TokenStore = Depends(get_token_store),
    cipher: TokenCipher = Depends(get_cipher),
) -> dict:
    """Relay the user's GitHub event feed using their stored token."""
    try:
        user_id = request.query_params.get("user_id")
        if not user_id:
            raise ClientInputError("Missing user_id")

        try:
            record = await token_store.select_one(user_id, GITHUB_PROVIDER)
        except StorageError as e:
            logger.error(f"Error reading token for user {user_id}: {e.message}")
            raise NotFoundError("Token not found", details=e.message)
        if record is None:
            raise NotFoundError("Token not found")

        access_token = cipher.decrypt(record.encrypted_token)
        activity = await github.get_user_events(access_token)
        logger.debug(f"Fetched GitHub activity for user {user_id}")
        return {"activity": activity}

    except VibePostError:
        raise
    except Exception as e:
        logger.error(f"Error fetching GitHub activity: {str(e)}")
        raise ServerError("Internal server error", details=str(e))
