"""
Platform-specific OAuth implementations.
"""

from .github import GitHubOAuth

__all__ = [
    'GitHubOAuth'
]
