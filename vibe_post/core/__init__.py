"""
Core OAuth and token storage functionality.
"""

from .oauth_base import OAuthBase
from .token_store import TokenStore, InMemoryTokenStore
from .db import SupabaseTokenStore

__all__ = ['OAuthBase', 'TokenStore', 'InMemoryTokenStore', 'SupabaseTokenStore']
