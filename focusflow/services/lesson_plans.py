from typing import Any, Optional

import structlog

from focusflow.exceptions import NotFoundError, ValidationError
from focusflow.schemas.lesson import LessonPlanCreate, NoteType, TeacherNoteCreate
from focusflow.services.store import Store

logger = structlog.get_logger()


async def create_lesson_plan(store: Store, plan: LessonPlanCreate) -> dict[str, Any]:
    row = await store.insert(
        "lesson_plans",
        {
            "teacher_id": plan.teacher_id,
            "title": plan.title,
            "subject": plan.subject,
            "grade_level": plan.grade_level.value,
            "original_content": plan.original_content,
            "file_url": plan.file_url,
        },
    )
    logger.info("Lesson plan created", lesson_plan_id=str(row["id"]))
    return row


async def list_lesson_plans(
    store: Store, teacher_id: str, adapted_only: bool = False
) -> list[dict[str, Any]]:
    """A teacher's lesson plans, newest first."""
    plans = await store.select(
        "lesson_plans",
        {"teacher_id": teacher_id},
        order_by="created_at",
        descending=True,
    )
    if adapted_only:
        plans = [p for p in plans if p.get("adhd_adapted_content") is not None]
    return plans


async def get_lesson_plan(store: Store, lesson_plan_id: str) -> dict[str, Any]:
    plans = await store.select("lesson_plans", {"id": lesson_plan_id})
    if not plans:
        raise NotFoundError(
            f"Lesson plan {lesson_plan_id} not found", resource_type="lesson_plan"
        )
    return plans[0]


async def delete_lesson_plan(store: Store, lesson_plan_id: str) -> None:
    deleted = await store.delete("lesson_plans", {"id": lesson_plan_id})
    if not deleted:
        raise NotFoundError(
            f"Lesson plan {lesson_plan_id} not found", resource_type="lesson_plan"
        )
    logger.info("Lesson plan deleted", lesson_plan_id=lesson_plan_id)


async def list_coaching_tips(store: Store, lesson_plan_id: str) -> list[dict[str, Any]]:
    return await store.select(
        "coaching_tips",
        {"lesson_plan_id": lesson_plan_id},
        order_by="created_at",
        descending=True,
    )


async def get_active_break_reminder(store: Store, lesson_plan_id: str) -> dict[str, Any]:
    """The newest active reminder, which sets the classroom break timer."""
    reminders = await store.select(
        "break_reminders",
        {"lesson_plan_id": lesson_plan_id, "is_active": True},
        order_by="created_at",
        descending=True,
    )
    if not reminders:
        raise NotFoundError(
            f"No active break reminder for lesson plan {lesson_plan_id}",
            resource_type="break_reminder",
        )
    return reminders[0]


# --- Teacher notes ---


async def create_note(
    store: Store, lesson_plan_id: str, note: TeacherNoteCreate
) -> dict[str, Any]:
    content = note.note_content.strip()
    if not content:
        raise ValidationError("Note content cannot be empty", fields=["note_content"])

    return await store.insert(
        "teacher_notes",
        {
            "lesson_plan_id": lesson_plan_id,
            "teacher_id": note.teacher_id,
            "note_content": content,
            "note_type": note.note_type.value,
        },
    )


async def list_notes(
    store: Store, lesson_plan_id: str, note_type: Optional[NoteType] = None
) -> list[dict[str, Any]]:
    filters: dict[str, Any] = {"lesson_plan_id": lesson_plan_id}
    if note_type:
        filters["note_type"] = note_type.value
    return await store.select(
        "teacher_notes", filters, order_by="created_at", descending=True
    )


async def delete_note(store: Store, note_id: str) -> None:
    deleted = await store.delete("teacher_notes", {"id": note_id})
    if not deleted:
        raise NotFoundError(f"Note {note_id} not found", resource_type="teacher_note")


async def list_teacher_notes(
    store: Store,
    teacher_id: str,
    lesson_plan_id: Optional[str] = None,
    note_type: Optional[NoteType] = None,
) -> list[dict[str, Any]]:
    """
    Notes a teacher wrote, newest first, across all of their plans unless
    ``lesson_plan_id`` narrows it to one. Each note carries the title and
    subject of its plan.
    """
    filters: dict[str, Any] = {"teacher_id": teacher_id}
    if lesson_plan_id:
        filters["lesson_plan_id"] = lesson_plan_id
    if note_type:
        filters["note_type"] = note_type.value
    notes = await store.select(
        "teacher_notes", filters, order_by="created_at", descending=True
    )
    plans = await _plans_by_id(store, teacher_id)
    return [_with_lesson(note, plans) for note in notes]


# --- Visualizers ---


async def list_visualizers(store: Store, lesson_plan_id: str) -> list[dict[str, Any]]:
    return await store.select(
        "visualizers",
        {"lesson_plan_id": lesson_plan_id},
        order_by="created_at",
        descending=True,
    )


async def list_teacher_visualizers(
    store: Store, teacher_id: str, subject: Optional[str] = None
) -> list[dict[str, Any]]:
    """Every visual aid on a teacher's plans, newest first."""
    plans = await _plans_by_id(store, teacher_id)
    if subject:
        plans = {pid: p for pid, p in plans.items() if p["subject"] == subject}
    if not plans:
        return []

    visualizers = await store.select(
        "visualizers",
        {"lesson_plan_id": list(plans)},
        order_by="created_at",
        descending=True,
    )
    return [_with_lesson(v, plans) for v in visualizers]


async def delete_visualizer(store: Store, visualizer_id: str) -> None:
    deleted = await store.delete("visualizers", {"id": visualizer_id})
    if not deleted:
        raise NotFoundError(
            f"Visualizer {visualizer_id} not found", resource_type="visualizer"
        )
    logger.info("Visualizer deleted", visualizer_id=visualizer_id)


async def _plans_by_id(store: Store, teacher_id: str) -> dict[str, dict[str, Any]]:
    plans = await store.select("lesson_plans", {"teacher_id": teacher_id})
    return {str(p["id"]): p for p in plans}


def _with_lesson(row: dict[str, Any], plans: dict[str, dict[str, Any]]) -> dict[str, Any]:
    plan = plans.get(str(row["lesson_plan_id"]), {})
    return {
        **row,
        "lesson_title": plan.get("title"),
        "lesson_subject": plan.get("subject"),
    }


# --- Progress summary ---


async def get_progress_summary(store: Store, teacher_id: str) -> dict[str, int]:
    """Counts behind the dashboard and the parent view."""
    plans = await store.select("lesson_plans", {"teacher_id": teacher_id})
    plan_ids = [str(p["id"]) for p in plans]

    summary = {
        "lesson_plans": len(plans),
        "ai_tips": 0,
        "break_reminders": 0,
        "visual_aids": 0,
    }
    if not plan_ids:
        return summary

    summary["ai_tips"] = await store.count("coaching_tips", {"lesson_plan_id": plan_ids})
    summary["break_reminders"] = await store.count(
        "break_reminders", {"lesson_plan_id": plan_ids}
    )
    summary["visual_aids"] = await store.count(
        "visualizers", {"lesson_plan_id": plan_ids}
    )
    return summary
