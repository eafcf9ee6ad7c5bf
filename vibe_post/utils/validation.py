from dataclasses import dataclass
from typing import Optional

MAX_USER_INPUT_LENGTH = 500
MAX_POST_LENGTH = 1300


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    character_count: int
    error: Optional[str] = None


def validate_user_input(text: str) -> ValidationResult:
    """Check free-text user input against the 500 character ceiling."""
    character_count = len(text)

    if character_count == 0:
        return ValidationResult(is_valid=False, character_count=0, error="Input cannot be empty")

    if character_count > MAX_USER_INPUT_LENGTH:
        return ValidationResult(
            is_valid=False,
            character_count=character_count,
            error=f"Input cannot exceed {MAX_USER_INPUT_LENGTH} characters",
        )

    return ValidationResult(is_valid=True, character_count=character_count)


def validate_post_content(content: str) -> ValidationResult:
    """Check generated post content against the 1300 character ceiling."""
    character_count = len(content)

    if character_count == 0:
        return ValidationResult(is_valid=False, character_count=0, error="Post content cannot be empty")

    if character_count > MAX_POST_LENGTH:
        return ValidationResult(
            is_valid=False,
            character_count=character_count,
            error=f"Post cannot exceed {MAX_POST_LENGTH} characters",
        )

    return ValidationResult(is_valid=True, character_count=character_count)


def get_character_count_display(current: int, maximum: int) -> str:
    return f"{current}/{maximum}"


def is_character_limit_exceeded(current: int, maximum: int) -> bool:
    return current > maximum
