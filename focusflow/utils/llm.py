"""Utility functions for LLM-related operations using LiteLLM."""

import asyncio
from typing import Any

import litellm
import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()

# Configure LiteLLM
litellm.telemetry = False
litellm.drop_params = True


class LLMMessage(BaseModel):
    """A single message in a chat conversation."""

    role: str  # "user", "assistant", or "system"
    content: str


class LLMResponse(BaseModel):
    """Text completion with usage data."""

    content: str
    usage: dict[str, Any] = Field(default_factory=dict)
    raw_response: Any = Field(None, exclude=True)

    model_config = ConfigDict(arbitrary_types_allowed=True)


async def get_completion(
    model: str,
    messages: list[LLMMessage],
    system_prompt: str | None = None,
    temperature: float = 0.7,
    max_tokens: int = 1000,
    max_attempts: int = 1,
    api_key: str | None = None,
) -> LLMResponse:
    """
    Get a text completion from an LLM.

    Args:
        model: Model name in litellm's provider prefix format,
            e.g. "openai/gpt-4". See https://docs.litellm.ai/docs/providers
        messages: The conversation messages.
        system_prompt: Optional system prompt.
        temperature: Model temperature (0.0 to 1.0).
        max_tokens: Maximum tokens to generate.
        max_attempts: Number of tries before the last error is raised.
        api_key: Provider key; litellm reads it from the environment when None.

    Returns:
        LLMResponse with content and usage data. Content is an empty string
        when the model returned nothing.
    """
    api_messages = [msg.model_dump() for msg in messages]
    if system_prompt:
        api_messages.insert(0, {"role": "system", "content": system_prompt})

    for attempt in range(max_attempts):
        try:
            logger.info(f"LLM request: {len(api_messages)} messages to {model}")

            response = await litellm.acompletion(
                model=model,
                messages=api_messages,
                temperature=temperature,
                max_tokens=max_tokens,
                api_key=api_key,
            )
            message = response.choices[0].message
            content = message.content or ""

            usage = {
                "prompt_tokens": getattr(response.usage, "prompt_tokens", 0),
                "completion_tokens": getattr(response.usage, "completion_tokens", 0),
                "total_tokens": getattr(response.usage, "total_tokens", 0),
            }

            return LLMResponse(content=content, usage=usage, raw_response=response)

        except Exception as e:
            if attempt == max_attempts - 1:
                logger.error(f"LLM call failed after {max_attempts} attempts: {e}")
                raise

            backoff = 2**attempt
            logger.warning(f"LLM error, retrying in {backoff}s: {e}")
            await asyncio.sleep(backoff)

    raise RuntimeError("LLM call failed after retries")


async def get_image_url(
    model: str,
    prompt: str,
    size: str = "1024x1024",
    quality: str = "standard",
    max_attempts: int = 1,
    api_key: str | None = None,
) -> str:
    """
    Generate one image and return its URL.

    The URL handed out by the provider is time-limited; callers that need the
    image later should copy it somewhere permanent.
    """
    for attempt in range(max_attempts):
        try:
            logger.info(f"Image request to {model}", size=size)
            response = await litellm.aimage_generation(
                model=model,
                prompt=prompt,
                size=size,
                quality=quality,
                n=1,
                api_key=api_key,
            )
            data = response.data or []
            return (data[0].url if data else None) or ""

        except Exception as e:
            if attempt == max_attempts - 1:
                logger.error(f"Image generation failed after {max_attempts} attempts: {e}")
                raise

            backoff = 2**attempt
            logger.warning(f"Image generation error, retrying in {backoff}s: {e}")
            await asyncio.sleep(backoff)

    raise RuntimeError("Image generation failed after retries")
