from abc import ABC, abstractmethod
from typing import Any, Dict
from ..utils.logger import get_logger

logger = get_logger(__name__)

SYSTEM_INSTRUCTION = "You are a LinkedIn post generator. Generate professional posts only."
DEFAULT_HASHTAGS = ["#AI", "#LinkedIn", "#Dev"]


def build_prompt(activity: str, context: str, style: str) -> str:
    """Assemble the generation prompt from already-sanitized fields."""
    return (
        f"SYSTEM: {SYSTEM_INSTRUCTION}\n"
        f"GITHUB_ACTIVITY: {activity}\n"
        f"USER_CONTEXT: {context}\n"
        f"STYLE: {style}\n"
        "\n"
        'Respond with valid JSON: {"post": "...", "hashtags": ["..."]}'
    )


class PostGenerator(ABC):
    """Turns a prompt into a draft post and hashtags."""

    @abstractmethod
    async def generate(self, prompt: str, activity: str, context: str, style: str) -> Dict[str, Any]:
        """
        Generate a post.

        Returns:
            Dict with ``post`` and ``hashtags``; the caller validates both
        """
        pass


class MockPostGenerator(PostGenerator):
    """Deterministic stand-in for a model call, built from the sanitized input only."""

    async def generate(self, prompt: str, activity: str, context: str, style: str) -> Dict[str, Any]:
        logger.debug(f"Mock generation for prompt of {len(prompt)} characters")
        return {
            "post": f"Here's a LinkedIn post about: {activity} ({context}) [{style}]",
            "hashtags": list(DEFAULT_HASHTAGS),
        }
