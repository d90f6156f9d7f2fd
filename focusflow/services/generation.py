"""Text and image generation collaborators backed by LiteLLM."""

from typing import Protocol

import structlog

from focusflow.config import settings
from focusflow.exceptions import GenerationError
from focusflow.prompts.lesson import (
    ADAPTATION_SYSTEM_PROMPT,
    COACHING_TIPS_SYSTEM_PROMPT,
    LessonContext,
    build_adaptation_prompt,
    build_coaching_tips_prompt,
)
from focusflow.utils.llm import LLMMessage, get_completion, get_image_url

logger = structlog.get_logger()

ADAPTATION_MAX_TOKENS = 1500
COACHING_TIPS_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7


class TextGenerator(Protocol):
    async def generate(
        self, system_prompt: str, user_prompt: str, max_tokens: int = ...
    ) -> str: ...


class ImageGenerator(Protocol):
    async def generate_image(self, prompt: str, size: str) -> str: ...


class LLMTextGenerator:
    """Single request/response text generation."""

    def __init__(
        self,
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_attempts: int | None = None,
        api_key: str | None = None,
    ):
        self.model = model or settings.TEXT_MODEL
        self.temperature = temperature
        self.max_attempts = max_attempts or settings.LLM_MAX_ATTEMPTS
        self.api_key = api_key or settings.OPENAI_API_KEY or None

    async def generate(
        self, system_prompt: str, user_prompt: str, max_tokens: int = 1000
    ) -> str:
        try:
            response = await get_completion(
                model=self.model,
                messages=[LLMMessage(role="user", content=user_prompt)],
                system_prompt=system_prompt,
                temperature=self.temperature,
                max_tokens=max_tokens,
                max_attempts=self.max_attempts,
                api_key=self.api_key,
            )
        except Exception as e:
            raise GenerationError(
                f"Text generation failed: {e}", service="text"
            ) from e

        logger.info("Text generated", model=self.model, usage=response.usage)
        return response.content


class LLMImageGenerator:
    """Returns one time-limited image URL per prompt."""

    def __init__(
        self,
        model: str | None = None,
        max_attempts: int | None = None,
        api_key: str | None = None,
    ):
        self.model = model or settings.IMAGE_MODEL
        self.max_attempts = max_attempts or settings.LLM_MAX_ATTEMPTS
        self.api_key = api_key or settings.OPENAI_API_KEY or None

    async def generate_image(self, prompt: str, size: str) -> str:
        try:
            url = await get_image_url(
                model=self.model,
                prompt=prompt,
                size=size,
                max_attempts=self.max_attempts,
                api_key=self.api_key,
            )
        except Exception as e:
            raise GenerationError(
                f"Image generation failed: {e}", service="image"
            ) from e

        if not url:
            raise GenerationError("Failed to generate visualizer image", service="image")
        return url


async def adapt_lesson_text(generator: TextGenerator, lesson: LessonContext) -> str:
    """Ask for the ADHD-friendly version of a lesson. Empty output is an error."""
    adapted = await generator.generate(
        ADAPTATION_SYSTEM_PROMPT,
        build_adaptation_prompt(lesson),
        max_tokens=ADAPTATION_MAX_TOKENS,
    )
    if not adapted or not adapted.strip():
        raise GenerationError("Failed to adapt lesson for ADHD", service="text")
    return adapted


async def generate_coaching_tips_text(
    generator: TextGenerator, lesson: LessonContext
) -> str:
    """Ask for coaching tips in the bolded-label format. May be empty."""
    return await generator.generate(
        COACHING_TIPS_SYSTEM_PROMPT,
        build_coaching_tips_prompt(lesson),
        max_tokens=COACHING_TIPS_MAX_TOKENS,
    )
