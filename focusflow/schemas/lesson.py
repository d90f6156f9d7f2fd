from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class GradeLevel(str, Enum):
    """Grade labels a lesson plan can target."""

    PRE_K = "Pre-K"
    KINDERGARTEN = "Kindergarten"
    GRADE_1 = "1st Grade"
    GRADE_2 = "2nd Grade"
    GRADE_3 = "3rd Grade"
    GRADE_4 = "4th Grade"
    GRADE_5 = "5th Grade"
    GRADE_6 = "6th Grade"
    GRADE_7 = "7th Grade"
    GRADE_8 = "8th Grade"
    GRADE_9 = "9th Grade"
    GRADE_10 = "10th Grade"
    GRADE_11 = "11th Grade"
    GRADE_12 = "12th Grade"


class TipType(str, Enum):
    """Category of a coaching tip."""

    ENGAGEMENT = "engagement"
    BREAK = "break"
    VISUAL = "visual"
    MOVEMENT = "movement"
    ATTENTION = "attention"


class NoteType(str, Enum):
    """Category of a teacher note."""

    BEHAVIORAL = "behavioral"
    ACADEMIC = "academic"
    GENERAL = "general"


class CamelModel(BaseModel):
    """Accepts and emits the camelCase keys the web client uses."""

    model_config = ConfigDict(populate_by_name=True)


# --- Adaptation ---


class AdaptLessonRequest(CamelModel):
    """
    Input of the adapt-lesson operation.

    Fields are optional at the schema level so that a missing field is
    reported as a 400 validation error by the orchestrator rather than a 422.
    """

    lesson_plan_id: Optional[str] = Field(None, alias="lessonPlanId")
    content: Optional[str] = None
    subject: Optional[str] = None
    grade_level: Optional[str] = Field(None, alias="gradeLevel")


class AdaptLessonResponse(CamelModel):
    success: bool = True
    adapted_content: str = Field(..., alias="adaptedContent")
    coaching_tips: str = Field(..., alias="coachingTips")


# --- Visualizers ---


class VisualizerRequest(CamelModel):
    lesson_plan_id: Optional[str] = Field(None, alias="lessonPlanId")
    concept: Optional[str] = None
    grade_level: Optional[str] = Field(None, alias="gradeLevel")
    description: Optional[str] = None


class Visualizer(BaseModel):
    id: UUID
    lesson_plan_id: UUID
    concept: str
    image_url: str
    grade_level: Optional[str] = None
    description: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LessonVisualizer(Visualizer):
    """A visualizer listed with the plan it illustrates."""

    lesson_title: Optional[str] = None
    lesson_subject: Optional[str] = None


class VisualizerResponse(BaseModel):
    success: bool = True
    visualizer: Visualizer


class VisualAidsResponse(BaseModel):
    success: bool = True
    visualizers: list[Visualizer]


# --- File processing ---


class ProcessFileResponse(BaseModel):
    text: str
    length: int


# --- Lesson plans ---


class LessonPlanCreate(BaseModel):
    teacher_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    grade_level: GradeLevel
    original_content: str = Field(..., min_length=1)
    file_url: Optional[str] = None


class LessonPlan(BaseModel):
    id: UUID
    teacher_id: str
    title: str
    subject: str
    grade_level: str
    original_content: str
    adhd_adapted_content: Optional[str] = None
    file_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CoachingTipRecord(BaseModel):
    id: UUID
    lesson_plan_id: UUID
    tip_text: str
    tip_type: TipType
    timestamp: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BreakReminder(BaseModel):
    id: UUID
    lesson_plan_id: UUID
    interval_minutes: int
    reminder_text: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# --- Teacher notes ---


class TeacherNoteCreate(BaseModel):
    teacher_id: str = Field(..., min_length=1)
    note_content: str = Field(..., min_length=1, max_length=4096)
    note_type: NoteType = NoteType.GENERAL


class TeacherNote(BaseModel):
    id: UUID
    lesson_plan_id: UUID
    teacher_id: str
    note_content: str
    note_type: NoteType
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LessonTeacherNote(TeacherNote):
    lesson_title: Optional[str] = None
    lesson_subject: Optional[str] = None


class ProgressSummary(CamelModel):
    """Read-only counts shown on the dashboard and to parents."""

    lesson_plans: int = Field(0, alias="lessonPlans")
    ai_tips: int = Field(0, alias="aiTips")
    break_reminders: int = Field(0, alias="breakReminders")
    visual_aids: int = Field(0, alias="visualAids")


class OperationResult(BaseModel):
    success: bool = True
    details: dict[str, Any] = Field(default_factory=dict)
