from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from focusflow.schemas.lesson import (
    BreakReminder,
    CoachingTipRecord,
    LessonPlan,
    LessonPlanCreate,
    LessonTeacherNote,
    NoteType,
    OperationResult,
    ProgressSummary,
    TeacherNote,
    TeacherNoteCreate,
)
from focusflow.services import lesson_plans as lesson_plan_service
from focusflow.utils.deps import StoreDep

router = APIRouter()


@router.post(
    "/lesson-plans",
    response_model=LessonPlan,
    status_code=status.HTTP_201_CREATED,
)
async def create_lesson_plan(plan: LessonPlanCreate, store: StoreDep) -> LessonPlan:
    row = await lesson_plan_service.create_lesson_plan(store, plan)
    return LessonPlan.model_validate(row)


@router.get("/lesson-plans", response_model=list[LessonPlan])
async def list_lesson_plans(
    store: StoreDep,
    teacher_id: str = Query(..., min_length=1),
    adapted_only: bool = Query(False),
):
    """
    A teacher's lesson plans, newest first. ``adapted_only`` keeps the plans
    that already have an ADHD adaptation, as the live coaching view needs.
    """
    rows = await lesson_plan_service.list_lesson_plans(store, teacher_id, adapted_only)
    return [LessonPlan.model_validate(row) for row in rows]


@router.get("/lesson-plans/{lesson_plan_id}", response_model=LessonPlan)
async def get_lesson_plan(lesson_plan_id: UUID, store: StoreDep) -> LessonPlan:
    row = await lesson_plan_service.get_lesson_plan(store, str(lesson_plan_id))
    return LessonPlan.model_validate(row)


@router.delete("/lesson-plans/{lesson_plan_id}", response_model=OperationResult)
async def delete_lesson_plan(lesson_plan_id: UUID, store: StoreDep) -> OperationResult:
    await lesson_plan_service.delete_lesson_plan(store, str(lesson_plan_id))
    return OperationResult()


@router.get(
    "/lesson-plans/{lesson_plan_id}/coaching-tips",
    response_model=list[CoachingTipRecord],
)
async def list_coaching_tips(lesson_plan_id: UUID, store: StoreDep):
    rows = await lesson_plan_service.list_coaching_tips(store, str(lesson_plan_id))
    return [CoachingTipRecord.model_validate(row) for row in rows]


@router.get(
    "/lesson-plans/{lesson_plan_id}/break-reminder", response_model=BreakReminder
)
async def get_break_reminder(lesson_plan_id: UUID, store: StoreDep) -> BreakReminder:
    """The active reminder the classroom break timer runs on."""
    row = await lesson_plan_service.get_active_break_reminder(store, str(lesson_plan_id))
    return BreakReminder.model_validate(row)


@router.post(
    "/lesson-plans/{lesson_plan_id}/notes",
    response_model=TeacherNote,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    lesson_plan_id: UUID, note: TeacherNoteCreate, store: StoreDep
) -> TeacherNote:
    row = await lesson_plan_service.create_note(store, str(lesson_plan_id), note)
    return TeacherNote.model_validate(row)


@router.get("/lesson-plans/{lesson_plan_id}/notes", response_model=list[TeacherNote])
async def list_notes(
    lesson_plan_id: UUID,
    store: StoreDep,
    note_type: Optional[NoteType] = Query(None),
):
    rows = await lesson_plan_service.list_notes(store, str(lesson_plan_id), note_type)
    return [TeacherNote.model_validate(row) for row in rows]


@router.get("/teachers/{teacher_id}/notes", response_model=list[LessonTeacherNote])
async def list_teacher_notes(
    teacher_id: str,
    store: StoreDep,
    lesson_plan_id: Optional[UUID] = Query(None),
    note_type: Optional[NoteType] = Query(None),
):
    rows = await lesson_plan_service.list_teacher_notes(
        store,
        teacher_id,
        lesson_plan_id=str(lesson_plan_id) if lesson_plan_id else None,
        note_type=note_type,
    )
    return [LessonTeacherNote.model_validate(row) for row in rows]


@router.delete("/notes/{note_id}", response_model=OperationResult)
async def delete_note(note_id: UUID, store: StoreDep) -> OperationResult:
    await lesson_plan_service.delete_note(store, str(note_id))
    return OperationResult()


@router.get("/teachers/{teacher_id}/summary", response_model=ProgressSummary)
async def get_progress_summary(teacher_id: str, store: StoreDep) -> ProgressSummary:
    """Read-only progress counts for the dashboard and parents."""
    summary = await lesson_plan_service.get_progress_summary(store, teacher_id)
    return ProgressSummary(**summary)
