"""
Dependency utilities for FastAPI endpoints.

Every external collaborator is built here so endpoints receive explicit
values and tests can replace any of them through ``app.dependency_overrides``.
"""

from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from focusflow.database import get_db
from focusflow.services.generation import (
    ImageGenerator,
    LLMImageGenerator,
    LLMTextGenerator,
    TextGenerator,
)
from focusflow.services.object_storage import LocalObjectStorage, ObjectStorage
from focusflow.services.store import LessonStore, Store


async def get_store(db: AsyncSession = Depends(get_db)) -> Store:
    return LessonStore(db)


def get_text_generator() -> TextGenerator:
    return LLMTextGenerator()


def get_image_generator() -> ImageGenerator:
    return LLMImageGenerator()


def get_object_storage() -> ObjectStorage:
    return LocalObjectStorage()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield client


StoreDep = Annotated[Store, Depends(get_store)]
TextGeneratorDep = Annotated[TextGenerator, Depends(get_text_generator)]
ImageGeneratorDep = Annotated[ImageGenerator, Depends(get_image_generator)]
ObjectStorageDep = Annotated[ObjectStorage, Depends(get_object_storage)]
HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]
