import re

MAX_SANITIZED_LENGTH = 500

CODE_FENCE = "```"
ROLE_LABELS = ("System:", "Assistant:")

# Whitespace kept: ASCII whitespace, NBSP, the Unicode space separators, line and
# paragraph separators and BOM. Plain \s would also keep \x1c-\x1f and \x85.
_WHITESPACE = r"\t\n\v\f\r \xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

# Anything outside ASCII word characters, whitespace and basic punctuation
_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_" + _WHITESPACE + r".,!?()\[\]{}-]")
_AI_KEYWORDS = re.compile(r"DROP TABLE|System:|Assistant:", re.IGNORECASE)


def sanitize_user_input(text: str) -> str:
    """Strip prompt-injection markers and restrict the character set of free text.

    Markers are removed before the character filter runs, and the result is cut
    to ``MAX_SANITIZED_LENGTH`` characters last.
    """
    text = text.replace(CODE_FENCE, "")
    for label in ROLE_LABELS:
        text = text.replace(label, "")
    text = _DISALLOWED_CHARS.sub("", text)
    return text[:MAX_SANITIZED_LENGTH]


def sanitize_ai_text(text: str) -> str:
    """Sanitize text on its way into or out of post generation.

    Adds case-insensitive removal of SQL and role keywords on top of
    :func:`sanitize_user_input`.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected string input, got {type(text).__name__}")
    return _AI_KEYWORDS.sub("", sanitize_user_input(text))
