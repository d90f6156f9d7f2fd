from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query

from focusflow.schemas.lesson import (
    LessonVisualizer,
    OperationResult,
    Visualizer,
    VisualAidsResponse,
    VisualizerRequest,
    VisualizerResponse,
)
from focusflow.services import lesson_plans as lesson_plan_service
from focusflow.services import visualizer as visualizer_service
from focusflow.utils.deps import (
    HttpClientDep,
    ImageGeneratorDep,
    ObjectStorageDep,
    StoreDep,
)

router = APIRouter()


@router.post(
    "/generate-visualizer",
    response_model=VisualizerResponse,
    description="Generate an illustration for one concept and attach it to a lesson plan.",
)
async def generate_visualizer(
    request: VisualizerRequest,
    store: StoreDep,
    image_generator: ImageGeneratorDep,
    object_storage: ObjectStorageDep,
    http_client: HttpClientDep,
) -> VisualizerResponse:
    row = await visualizer_service.generate_visualizer(
        request=request,
        store=store,
        image_generator=image_generator,
        object_storage=object_storage,
        http_client=http_client,
    )
    return VisualizerResponse(visualizer=Visualizer.model_validate(row))


@router.post(
    "/lesson-plans/{lesson_plan_id}/visual-aids",
    response_model=VisualAidsResponse,
    description="Illustrate up to two concepts found in a lesson plan.",
)
async def generate_visual_aids(
    lesson_plan_id: UUID,
    store: StoreDep,
    image_generator: ImageGeneratorDep,
    object_storage: ObjectStorageDep,
    http_client: HttpClientDep,
) -> VisualAidsResponse:
    rows = await visualizer_service.generate_visual_aids(
        lesson_plan_id=str(lesson_plan_id),
        store=store,
        image_generator=image_generator,
        object_storage=object_storage,
        http_client=http_client,
    )
    return VisualAidsResponse(
        visualizers=[Visualizer.model_validate(row) for row in rows]
    )


@router.get(
    "/lesson-plans/{lesson_plan_id}/visualizers", response_model=list[Visualizer]
)
async def list_visualizers(lesson_plan_id: UUID, store: StoreDep):
    rows = await lesson_plan_service.list_visualizers(store, str(lesson_plan_id))
    return [Visualizer.model_validate(row) for row in rows]


@router.get(
    "/teachers/{teacher_id}/visualizers", response_model=list[LessonVisualizer]
)
async def list_teacher_visualizers(
    teacher_id: str,
    store: StoreDep,
    subject: Optional[str] = Query(None),
):
    """The visual aids library: every image on a teacher's plans, newest first."""
    rows = await lesson_plan_service.list_teacher_visualizers(store, teacher_id, subject)
    return [LessonVisualizer.model_validate(row) for row in rows]


@router.delete("/visualizers/{visualizer_id}", response_model=OperationResult)
async def delete_visualizer(visualizer_id: UUID, store: StoreDep) -> OperationResult:
    await lesson_plan_service.delete_visualizer(store, str(visualizer_id))
    return OperationResult()
