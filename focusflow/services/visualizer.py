"""Visualizer generation: one image per concept, copied to permanent storage when possible."""

import re
import time
from typing import Any

import httpx
import structlog

from focusflow.config import settings
from focusflow.exceptions import NotFoundError, ValidationError
from focusflow.prompts.lesson import build_visualizer_prompt
from focusflow.schemas.lesson import VisualizerRequest
from focusflow.services.concepts import MAX_VISUAL_CONCEPTS, extract_concepts
from focusflow.services.generation import ImageGenerator
from focusflow.services.object_storage import ObjectStorage
from focusflow.services.store import Store

logger = structlog.get_logger()

VISUALIZER_BUCKET = "visualizers"
IMAGE_CONTENT_TYPE = "image/png"
IMAGE_FETCH_TIMEOUT = 30.0


def default_description(concept: str, grade_level: str) -> str:
    return f"Visual representation of {concept} for {grade_level} students"


def image_object_path(lesson_plan_id: str, concept: str) -> str:
    slug = re.sub(r"[^a-z0-9]", "-", concept.lower())
    return f"{lesson_plan_id}/{slug}-{int(time.time() * 1000)}.png"


async def persist_image(
    image_url: str,
    lesson_plan_id: str,
    concept: str,
    object_storage: ObjectStorage,
    http_client: httpx.AsyncClient,
) -> str:
    """
    Copy a generated image into object storage and return its public URL.

    Any failure along the way is logged and the generated URL is returned
    instead, even though it may expire.
    """
    try:
        response = await http_client.get(image_url, timeout=IMAGE_FETCH_TIMEOUT)
        response.raise_for_status()

        path = image_object_path(lesson_plan_id, concept)
        await object_storage.upload(
            VISUALIZER_BUCKET, path, response.content, IMAGE_CONTENT_TYPE
        )
        public_url = object_storage.get_public_url(VISUALIZER_BUCKET, path)
    except Exception as e:
        logger.warning(
            "Storage operation failed, using original image URL",
            lesson_plan_id=lesson_plan_id,
            concept=concept,
            error=str(e),
        )
        return image_url

    logger.info("Permanent image URL created", url=public_url)
    return public_url


async def generate_visualizer(
    request: VisualizerRequest,
    store: Store,
    image_generator: ImageGenerator,
    object_storage: ObjectStorage,
    http_client: httpx.AsyncClient,
) -> dict[str, Any]:
    missing = [
        alias
        for name, alias in (
            ("lesson_plan_id", "lessonPlanId"),
            ("concept", "concept"),
            ("grade_level", "gradeLevel"),
        )
        if not (getattr(request, name) or "").strip()
    ]
    if missing:
        raise ValidationError("Missing required fields", fields=missing)

    logger.info(
        "Generate visualizer request",
        lesson_plan_id=request.lesson_plan_id,
        concept=request.concept,
        grade_level=request.grade_level,
    )

    image_url = await image_generator.generate_image(
        build_visualizer_prompt(request.concept, request.grade_level),
        settings.IMAGE_SIZE,
    )

    final_url = await persist_image(
        image_url,
        request.lesson_plan_id,
        request.concept,
        object_storage,
        http_client,
    )

    visualizer = await store.insert(
        "visualizers",
        {
            "lesson_plan_id": request.lesson_plan_id,
            "concept": request.concept,
            "image_url": final_url,
            "grade_level": request.grade_level,
            "description": request.description
            or default_description(request.concept, request.grade_level),
        },
    )
    logger.info("Visualizer saved", visualizer_id=str(visualizer.get("id")))
    return visualizer


async def generate_visual_aids(
    lesson_plan_id: str,
    store: Store,
    image_generator: ImageGenerator,
    object_storage: ObjectStorage,
    http_client: httpx.AsyncClient,
) -> list[dict[str, Any]]:
    """Illustrate the first concepts found in a lesson plan, one at a time."""
    plans = await store.select("lesson_plans", {"id": lesson_plan_id})
    if not plans:
        raise NotFoundError(
            f"Lesson plan {lesson_plan_id} not found", resource_type="lesson_plan"
        )
    plan = plans[0]

    concepts = extract_concepts(plan["original_content"])[:MAX_VISUAL_CONCEPTS]

    visualizers = []
    for concept in concepts:
        visualizers.append(
            await generate_visualizer(
                VisualizerRequest(
                    lesson_plan_id=str(plan["id"]),
                    concept=concept,
                    grade_level=plan["grade_level"],
                    description=f"Visual aid for {concept} in {plan['subject']}",
                ),
                store,
                image_generator,
                object_storage,
                http_client,
            )
        )
    return visualizers
