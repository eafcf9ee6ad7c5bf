import pytest
from fastapi.testclient import TestClient
from vibe_post.config import Settings
from vibe_post.core.errors import StorageError
from vibe_post.core.token_store import InMemoryTokenStore
from vibe_post.main import create_app
from vibe_post.models.post_models import TokenExchange
from vibe_post.platforms.github import GitHubOAuth
from vibe_post.utils.crypto import TokenCipher

TEST_ENCRYPTION_KEY = "0123456789abcdef0123456789abcdef"
TEST_REDIRECT_URI = "http://localhost:3000/api/auth/github"


def make_settings(**overrides) -> Settings:
    values = dict(
        GITHUB_CLIENT_ID="test_client_id",
        GITHUB_CLIENT_SECRET="test_client_secret",
        GITHUB_REDIRECT_URI=TEST_REDIRECT_URI,
        SUPABASE_URL="http://supabase.test",
        SUPABASE_SERVICE_KEY="test_service_key",
        ENCRYPTION_KEY=TEST_ENCRYPTION_KEY,
        ENVIRONMENT="testing",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeCipher(TokenCipher):
    """Reversible marker encoding instead of real encryption."""

    def encrypt(self, text: str) -> str:
        return f"encrypted:{text}"

    def decrypt(self, encrypted: str) -> str:
        prefix, _, text = encrypted.partition(":")
        if prefix != "encrypted":
            raise ValueError("Not a fake-encrypted value")
        return text


class FakeGitHubOAuth(GitHubOAuth):
    """GitHub client with canned responses; an Exception value is raised instead."""

    def __init__(self):
        super().__init__(
            client_id="test_client_id",
            client_secret="test_client_secret",
            callback_url=TEST_REDIRECT_URI,
        )
        self.token_exchange = TokenExchange(status=200, payload={"access_token": "gho_validtoken123"})
        self.profile = {"id": 12345, "login": "octocat"}
        self.events = [{"id": "1", "type": "PushEvent", "repo": {"name": "octocat/hello-world"}}]
        self.exchanged_codes = []
        self.tokens_used = []

    @staticmethod
    def _resolve(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def get_access_token(self, code: str) -> TokenExchange:
        self.exchanged_codes.append(code)
        return self._resolve(self.token_exchange)

    async def get_user_profile(self, access_token: str):
        self.tokens_used.append(access_token)
        return self._resolve(self.profile)

    async def get_user_events(self, access_token: str):
        self.tokens_used.append(access_token)
        return self._resolve(self.events)


class FailingTokenStore(InMemoryTokenStore):
    """In-memory store that can be told to fail reads or writes."""

    def __init__(self, upsert_error=None, select_error=None):
        super().__init__()
        self.upsert_error = upsert_error
        self.select_error = select_error

    async def upsert(self, record):
        if self.upsert_error:
            raise StorageError(self.upsert_error)
        await super().upsert(record)

    async def select_one(self, user_id, provider):
        if self.select_error:
            raise StorageError(self.select_error)
        return await super().select_one(user_id, provider)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def token_store():
    return FailingTokenStore()


@pytest.fixture
def cipher():
    return FakeCipher()


@pytest.fixture
def github():
    return FakeGitHubOAuth()


@pytest.fixture
def app(settings, token_store, cipher, github):
    return create_app(settings=settings, token_store=token_store, cipher=cipher, github=github)


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as client:
        yield client
