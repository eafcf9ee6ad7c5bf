from pydantic import BaseModel
from typing import Any, List, Optional

GITHUB_PROVIDER = "github"
DEFAULT_STYLE = "Technical"


class UserToken(BaseModel):
    """Encrypted OAuth token row, keyed by (user_id, provider)."""
    user_id: str
    provider: str = GITHUB_PROVIDER
    encrypted_token: str
    github_user_id: int


class TokenExchange(BaseModel):
    """Result of exchanging an authorization code for an access token."""
    status: int
    payload: Any

    @property
    def access_token(self) -> Optional[str]:
        if not isinstance(self.payload, dict):
            return None
        return self.payload.get("access_token") or None


class AIResponse(BaseModel):
    post: str
    hashtags: List[str]


class PostStyle(BaseModel):
    id: str
    name: str
    description: str


POST_STYLES = [
    PostStyle(
        id="technical",
        name="Technical",
        description="Professional and technical tone with code insights",
    ),
    PostStyle(
        id="casual",
        name="Casual",
        description="Conversational and approachable",
    ),
    PostStyle(
        id="inspiring",
        name="Inspiring",
        description="Motivational and thought-provoking",
    ),
    PostStyle(
        id="educational",
        name="Educational",
        description="Teaching and knowledge-sharing focused",
    ),
]
