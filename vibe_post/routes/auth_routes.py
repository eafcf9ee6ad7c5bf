from typing import Optional
from urllib.parse import urlencode
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from ..core.errors import ClientInputError, ServerError, StorageError, VibePostError
from ..core.token_store import TokenStore
from ..models.post_models import GITHUB_PROVIDER, UserToken
from ..platforms.github import GitHubOAuth
from ..utils.crypto import TokenCipher
from ..utils.logger import get_logger
from .dependencies import get_cipher, get_github_oauth, get_token_store

logger = get_logger(__name__)
auth_router = APIRouter()


@auth_router.get("/github/login")
async def github_login(
    state: Optional[str] = None,
    github: GitHubOAuth = Depends(get_github_oauth),
) -> RedirectResponse:
    """Send the browser to GitHub's consent screen."""
    try:
        return RedirectResponse(github.get_authorization_url(state=state), status_code=302)
    except Exception as e:
        logger.error(f"Error building GitHub authorization URL: {str(e)}")
        raise ServerError("Internal server error", details=str(e))


@auth_router.get("/github")
async def github_callback(
    request: Request,
    github: GitHubOAuth = Depends(get_github_oauth),
    token_store: TokenStore = Depends(get_token_store),
    cipher: TokenCipher = Depends(get_cipher),
) -> RedirectResponse:
    """
    Handle the GitHub OAuth callback.

    Exchanges the code for an access token, stores the token encrypted under the
    GitHub user id and redirects to the app root with ``auth=success``.
    """
    logger.info("=== GitHub OAuth Callback Start ===")

    try:
        code = request.query_params.get("code")
        logger.info(f"Code present: {bool(code)}")
        if not code:
            raise ClientInputError("Missing code")

        token = await github.get_access_token(code)
        if not token.access_token:
            logger.error(f"Token exchange returned no access token. Status: {token.status}")
            raise ServerError(
                "Failed to get access token",
                details=token.payload,
                debug={
                    "status": token.status,
                    "clientIdPresent": bool(github.client_id),
                    "clientSecretPresent": github.has_client_secret,
                    "redirectUri": github.callback_url,
                },
            )

        profile = await github.get_user_profile(token.access_token)
        github_user_id = profile.get("id")
        # 0 is rejected along with a missing id
        if not github_user_id:
            logger.error("GitHub profile response has no user id")
            raise ServerError("GitHub user ID not found")

        record = UserToken(
            user_id=str(github_user_id),
            provider=GITHUB_PROVIDER,
            encrypted_token=cipher.encrypt(token.access_token),
            github_user_id=github_user_id,
        )
        try:
            await token_store.upsert(record)
        except StorageError as e:
            if not e.is_duplicate_key:
                logger.error(f"Failed to store GitHub token: {e.message}")
                raise ServerError("Failed to store token", details=e.message)
            logger.info(f"User {github_user_id} already authenticated, keeping stored token")

        logger.info(f"=== GitHub OAuth Flow Complete for user {github_user_id} ===")
        redirect_url = request.url.replace(
            path="/",
            query=urlencode({"auth": "success", "user": str(github_user_id)}),
        )
        return RedirectResponse(str(redirect_url), status_code=302)

    except VibePostError:
        raise
    except Exception as e:
        logger.error(f"Error in GitHub callback: {str(e)}")
        raise ServerError("Internal server error", details=str(e))
