from fastapi import Request
from ..core.token_store import TokenStore
from ..platforms.github import GitHubOAuth
from ..services.post_generator import PostGenerator
from ..utils.crypto import TokenCipher

# Collaborators are built once in create_app() and shared read-only by every request


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


def get_cipher(request: Request) -> TokenCipher:
    return request.app.state.cipher


def get_github_oauth(request: Request) -> GitHubOAuth:
    return request.app.state.github


def get_post_generator(request: Request) -> PostGenerator:
    return request.app.state.post_generator
