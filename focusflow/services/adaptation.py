"""
Adapt-a-lesson orchestration.

Stages run one after another within the request:

1. validate the four required fields
2. generate the adapted lesson text
3. store it on the lesson plan
4. generate the coaching-tip text
5. parse and insert each tip
6. insert one break reminder sized for the grade level

Stages 2-4 abort the request on failure. Stages 5 and 6 are best-effort:
every write is committed on its own and reported in ``AdaptationResult.writes``
whether or not it succeeded.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

import structlog

from focusflow.exceptions import FocusFlowException, ValidationError
from focusflow.prompts.lesson import LessonContext
from focusflow.schemas.lesson import AdaptLessonRequest
from focusflow.services.break_policy import BREAK_REMINDER_TEXT, interval_minutes
from focusflow.services.generation import (
    TextGenerator,
    adapt_lesson_text,
    generate_coaching_tips_text,
)
from focusflow.services.store import Store
from focusflow.services.tip_parser import CoachingTip, parse_coaching_tips

logger = structlog.get_logger()

REQUIRED_FIELDS = {
    "lesson_plan_id": "lessonPlanId",
    "content": "content",
    "subject": "subject",
    "grade_level": "gradeLevel",
}


@dataclass
class WriteOutcome:
    """Result of one storage write."""

    operation: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class AdaptationResult:
    adapted_content: str
    coaching_tips_text: str
    tips: list[CoachingTip] = field(default_factory=list)
    break_interval: int = 0
    writes: list[WriteOutcome] = field(default_factory=list)

    @property
    def failed_writes(self) -> list[WriteOutcome]:
        return [w for w in self.writes if not w.succeeded]


def validate_adapt_request(request: AdaptLessonRequest) -> None:
    missing = [
        alias
        for name, alias in REQUIRED_FIELDS.items()
        if not (getattr(request, name) or "").strip()
    ]
    if missing:
        raise ValidationError("Missing required fields", fields=missing)


async def adapt_lesson(
    request: AdaptLessonRequest, store: Store, generator: TextGenerator
) -> AdaptationResult:
    validate_adapt_request(request)

    lesson_plan_id = request.lesson_plan_id
    log = logger.bind(lesson_plan_id=lesson_plan_id)
    lesson = LessonContext(
        content=request.content,
        subject=request.subject,
        grade_level=request.grade_level,
    )

    adapted_content = await adapt_lesson_text(generator, lesson)
    log.info("Lesson adapted", length=len(adapted_content))

    await store.update(
        "lesson_plans",
        {"id": lesson_plan_id},
        {
            "adhd_adapted_content": adapted_content,
            "updated_at": datetime.now(timezone.utc),
        },
    )
    writes = [WriteOutcome(operation="update_lesson_plan", succeeded=True)]

    coaching_tips_text = await generate_coaching_tips_text(generator, lesson)

    tips: list[CoachingTip] = []
    if coaching_tips_text:
        tips = parse_coaching_tips(coaching_tips_text)
        for position, tip in enumerate(tips):
            writes.append(
                await _best_effort(
                    f"insert_coaching_tip[{position}]",
                    store.insert(
                        "coaching_tips",
                        {
                            "lesson_plan_id": lesson_plan_id,
                            "tip_text": tip.suggestion,
                            "tip_type": tip.type.value,
                        },
                    ),
                )
            )
    log.info("Coaching tips parsed", tip_count=len(tips))

    break_interval = interval_minutes(request.grade_level)
    writes.append(
        await _best_effort(
            "insert_break_reminder",
            store.insert(
                "break_reminders",
                {
                    "lesson_plan_id": lesson_plan_id,
                    "interval_minutes": break_interval,
                    "reminder_text": BREAK_REMINDER_TEXT,
                    "is_active": True,
                },
            ),
        )
    )

    result = AdaptationResult(
        adapted_content=adapted_content,
        coaching_tips_text=coaching_tips_text,
        tips=tips,
        break_interval=break_interval,
        writes=writes,
    )
    if result.failed_writes:
        log.warning(
            "Lesson adapted with failed writes",
            failed=[w.operation for w in result.failed_writes],
        )
    else:
        log.info("Lesson adaptation stored", interval_minutes=break_interval)
    return result


async def _best_effort(operation: str, write) -> WriteOutcome:
    try:
        await write
    except FocusFlowException as e:
        logger.warning("Write failed", operation=operation, error=e.message)
        return WriteOutcome(operation=operation, succeeded=False, error=e.message)
    return WriteOutcome(operation=operation, succeeded=True)
