import structlog
from fastapi import APIRouter

from focusflow.schemas.lesson import AdaptLessonRequest, AdaptLessonResponse
from focusflow.services import adaptation as adaptation_service
from focusflow.utils.deps import StoreDep, TextGeneratorDep

router = APIRouter()
logger = structlog.get_logger()


@router.post(
    "/adapt-lesson",
    response_model=AdaptLessonResponse,
    description="Generate an ADHD-friendly adaptation, coaching tips and a break reminder for a lesson plan.",
)
async def adapt_lesson(
    request: AdaptLessonRequest,
    store: StoreDep,
    generator: TextGeneratorDep,
) -> AdaptLessonResponse:
    result = await adaptation_service.adapt_lesson(
        request=request, store=store, generator=generator
    )
    return AdaptLessonResponse(
        success=True,
        adapted_content=result.adapted_content,
        coaching_tips=result.coaching_tips_text,
    )
