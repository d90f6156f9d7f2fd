"""Break interval policy: how many minutes of focus before a brain break."""

from typing import Optional

from focusflow.schemas.lesson import GradeLevel

DEFAULT_BREAK_INTERVAL = 20

BREAK_REMINDER_TEXT = "Time for a brain break! Try a 2-minute movement activity."

BREAK_INTERVALS: dict[str, int] = {
    GradeLevel.PRE_K.value: 8,
    GradeLevel.KINDERGARTEN.value: 10,
    GradeLevel.GRADE_1.value: 12,
    GradeLevel.GRADE_2.value: 12,
    GradeLevel.GRADE_3.value: 15,
    GradeLevel.GRADE_4.value: 15,
    GradeLevel.GRADE_5.value: 18,
    GradeLevel.GRADE_6.value: 20,
    GradeLevel.GRADE_7.value: 20,
    GradeLevel.GRADE_8.value: 22,
    GradeLevel.GRADE_9.value: 25,
    GradeLevel.GRADE_10.value: 25,
    GradeLevel.GRADE_11.value: 25,
    GradeLevel.GRADE_12.value: 30,
}


def interval_minutes(grade_level: Optional[str]) -> int:
    """Return the break interval for a grade label, 20 for anything unknown."""
    if isinstance(grade_level, GradeLevel):
        grade_level = grade_level.value
    return BREAK_INTERVALS.get(grade_level, DEFAULT_BREAK_INTERVAL)
