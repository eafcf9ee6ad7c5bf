from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import uvicorn
from . import __version__
from .config import Settings, get_settings
from .core.db import SupabaseTokenStore
from .core.errors import VibePostError
from .core.token_store import TokenStore
from .platforms.github import GitHubOAuth
from .routes.ai_routes import ai_router
from .routes.auth_routes import auth_router
from .routes.github_routes import github_router
from .services.post_generator import MockPostGenerator, PostGenerator
from .utils.crypto import AESTokenCipher, TokenCipher
from .utils.logger import get_logger

logger = get_logger(__name__)


# Security Headers Middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "connect-src 'self' https:; "
            "frame-ancestors 'self'"
        )
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info(f"Starting Vibe-Post in {settings.ENVIRONMENT} environment")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Log configuration, never the secret values
    credentials = settings.github_credentials_summary
    logger.debug("GitHub OAuth Configuration:")
    logger.debug(f"- Client ID configured: {'Yes' if credentials['clientIdPresent'] else 'No'}")
    logger.debug(f"- Client secret configured: {'Yes' if credentials['clientSecretPresent'] else 'No'}")
    logger.debug(f"- Redirect URI: {credentials['redirectUri']}")
    logger.debug(f"Token store: {type(app.state.token_store).__name__}")
    logger.debug(f"Allowed Origins: {settings.cors_origins}")

    yield

    logger.info("Shutting down Vibe-Post")


async def vibe_post_error_handler(request: Request, exc: VibePostError):
    """Serialize domain errors as {error, details?, debug?}."""
    if exc.status_code >= 500:
        logger.error(f"Request to {request.url.path} failed: {exc.error}")
    else:
        logger.info(f"Request to {request.url.path} rejected: {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled error occurred: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)}
    )


def create_app(
    settings: Optional[Settings] = None,
    token_store: Optional[TokenStore] = None,
    cipher: Optional[TokenCipher] = None,
    github: Optional[GitHubOAuth] = None,
    post_generator: Optional[PostGenerator] = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators that are not passed in are built from ``settings``; a missing
    or malformed required setting raises here, before the server accepts requests.
    """
    settings = settings if settings is not None else get_settings()

    app = FastAPI(
        title="Vibe-Post",
        description="GitHub activity to social media post generator",
        version=__version__,
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.token_store = token_store if token_store is not None else SupabaseTokenStore(
        url=settings.SUPABASE_URL,
        service_key=settings.SUPABASE_SERVICE_KEY,
        table=settings.TOKEN_TABLE,
    )
    app.state.cipher = cipher if cipher is not None else AESTokenCipher(settings.ENCRYPTION_KEY)
    app.state.github = github if github is not None else GitHubOAuth(
        client_id=settings.GITHUB_CLIENT_ID,
        client_secret=settings.GITHUB_CLIENT_SECRET,
        callback_url=settings.GITHUB_REDIRECT_URI,
        oauth_url=settings.GITHUB_OAUTH_URL,
        api_url=settings.GITHUB_API_URL,
        default_scopes=settings.GITHUB_SCOPES.split(),
    )
    app.state.post_generator = post_generator if post_generator is not None else MockPostGenerator()

    # Add security headers middleware
    app.add_middleware(SecurityHeadersMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.add_exception_handler(VibePostError, vibe_post_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(github_router, prefix="/api/github", tags=["github"])
    app.include_router(ai_router, prefix="/api/ai", tags=["ai"])

    @app.get("/")
    async def root():
        """Root endpoint to verify service is running."""
        return {
            "message": "Vibe-Post API is running",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_mode": settings.DEBUG,
        }

    return app


# Run the application
if __name__ == "__main__":
    settings = get_settings()
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "vibe_post.main:create_app",
        factory=True,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "development",
        workers=1 if settings.ENVIRONMENT == "development" else settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
    )
