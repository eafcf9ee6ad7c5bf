import pytest
from vibe_post.core.errors import UpstreamError
from vibe_post.models.post_models import UserToken


@pytest.fixture
def stored_token(token_store):
    token_store._rows[("12345", "github")] = UserToken(
        user_id="12345",
        provider="github",
        encrypted_token="encrypted:gho_validtoken123",
        github_user_id=12345,
    )


def test_returns_400_without_user_id(client):
    response = client.get("/api/github/activity")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing user_id"}


def test_returns_404_when_no_token_stored(client):
    response = client.get("/api/github/activity?user_id=999")
    assert response.status_code == 404
    assert "Token not found" in response.json()["error"]


def test_storage_read_error_is_not_found(client, token_store):
    token_store.select_error = "JSON object requested, multiple (or no) rows returned"

    response = client.get("/api/github/activity?user_id=12345")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Token not found",
        "details": "JSON object requested, multiple (or no) rows returned",
    }


def test_returns_activity_with_decrypted_token(client, github, stored_token):
    response = client.get("/api/github/activity?user_id=12345")

    assert response.status_code == 200
    assert response.json() == {"activity": github.events}
    assert github.tokens_used == ["gho_validtoken123"]


def test_upstream_failure_is_bad_gateway(client, github, stored_token):
    github.events = UpstreamError("Failed to fetch GitHub activity", status=403)

    response = client.get("/api/github/activity?user_id=12345")

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to fetch GitHub activity", "status": 403}


def test_undecryptable_token_is_server_error(client, token_store):
    token_store._rows[("12345", "github")] = UserToken(
        user_id="12345", provider="github", encrypted_token="garbage", github_user_id=12345
    )

    response = client.get("/api/github/activity?user_id=12345")

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_network_error_is_server_error(client, github, stored_token):
    github.events = ConnectionError("connection reset")

    response = client.get("/api/github/activity?user_id=12345")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "details": "connection reset"}
