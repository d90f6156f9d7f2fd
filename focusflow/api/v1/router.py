from fastapi import APIRouter

from focusflow.api.v1.endpoints import files, health, lesson_plans, lessons, visualizers

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(lessons.router, tags=["Lessons"])
api_router.include_router(visualizers.router, tags=["Visualizers"])
api_router.include_router(files.router, tags=["Files"])
api_router.include_router(lesson_plans.router, tags=["Lesson Plans"])
