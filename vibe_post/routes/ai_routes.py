from fastapi import APIRouter, Depends, Request
from ..core.errors import ClientInputError, ServerError, VibePostError
from ..models.post_models import AIResponse, DEFAULT_STYLE, POST_STYLES
from ..services.post_generator import PostGenerator, build_prompt
from ..utils.logger import get_logger
from ..utils.sanitize import sanitize_ai_text
from ..utils.validation import validate_post_content, validate_user_input
from .dependencies import get_post_generator

logger = get_logger(__name__)
ai_router = APIRouter()


@ai_router.get("/styles")
async def list_styles() -> dict:
    return {"styles": [style.model_dump() for style in POST_STYLES]}


@ai_router.post("", response_model=AIResponse)
async def generate_post(
    request: Request,
    generator: PostGenerator = Depends(get_post_generator),
) -> AIResponse:
    """
    Generate a post from GitHub activity and user context.

    Expects ``{"activity": str, "context": str, "style": str}``. Both inputs are
    sanitized before they reach the prompt, and the generated post is sanitized
    again before it is returned.
    """
    try:
        # Parsed by hand so that a malformed body is a 500, not a 422
        body = await request.json()

        activity = sanitize_ai_text(body.get("activity") or "")
        context = sanitize_ai_text(body.get("context") or "")
        style = body.get("style")
        style_value = (sanitize_ai_text(style) if isinstance(style, str) else "") or DEFAULT_STYLE

        activity_validation = validate_user_input(activity)
        if not activity_validation.is_valid:
            raise ClientInputError("Invalid activity", details=activity_validation.error)
        context_validation = validate_user_input(context)
        if not context_validation.is_valid:
            raise ClientInputError("Invalid context", details=context_validation.error)

        prompt = build_prompt(activity, context, style_value)
        result = await generator.generate(prompt, activity, context, style_value)

        post = sanitize_ai_text(result.get("post") or "")
        post_validation = validate_post_content(post)
        if not post_validation.is_valid:
            logger.error(f"Generated post failed validation: {post_validation.error}")
            raise ServerError("Generated post invalid", details=post_validation.error)

        hashtags = result.get("hashtags")
        if not isinstance(hashtags, list) or not all(isinstance(tag, str) for tag in hashtags):
            logger.error("Generated hashtags are not a list of strings")
            raise ServerError("Invalid hashtags format")

        logger.info(f"Generated post of {post_validation.character_count} characters in style {style_value}")
        return AIResponse(post=post, hashtags=hashtags)

    except VibePostError:
        raise
    except Exception as e:
        logger.error(f"Error generating post: {str(e)}")
        raise ServerError("Internal server error", details=str(e))
