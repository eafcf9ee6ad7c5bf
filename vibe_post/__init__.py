"""
Vibe-Post
---------
Turns a user's GitHub activity into a social media post draft.
"""

__version__ = "1.0.0"
