"""init lesson tables

Revision ID: 3c1f9a2b7d44
Revises:
Create Date: 2026-03-01 12:00:00.000000

"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d44"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto;")
    op.execute(
        """
        CREATE TABLE lesson_plans (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            teacher_id VARCHAR(255) NOT NULL,
            title VARCHAR(255) NOT NULL,
            subject VARCHAR(100) NOT NULL,
            grade_level VARCHAR(50) NOT NULL,
            original_content TEXT NOT NULL,
            adhd_adapted_content TEXT,
            file_url TEXT,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute("CREATE INDEX idx_lesson_plans_teacher_id ON lesson_plans(teacher_id);")

    op.execute(
        """
        CREATE TABLE coaching_tips (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            lesson_plan_id UUID NOT NULL REFERENCES lesson_plans(id) ON DELETE CASCADE,
            tip_text TEXT NOT NULL,
            tip_type VARCHAR(20) NOT NULL
                CHECK (tip_type IN ('engagement', 'break', 'visual', 'movement', 'attention')),
            timestamp TIMESTAMP WITH TIME ZONE,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_coaching_tips_lesson_plan_id ON coaching_tips(lesson_plan_id);"
    )

    op.execute(
        """
        CREATE TABLE break_reminders (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            lesson_plan_id UUID NOT NULL REFERENCES lesson_plans(id) ON DELETE CASCADE,
            interval_minutes INTEGER NOT NULL CHECK (interval_minutes > 0),
            reminder_text TEXT NOT NULL,
            is_active BOOLEAN NOT NULL DEFAULT TRUE,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_break_reminders_lesson_plan_id ON break_reminders(lesson_plan_id);"
    )

    op.execute(
        """
        CREATE TABLE visualizers (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            lesson_plan_id UUID NOT NULL REFERENCES lesson_plans(id) ON DELETE CASCADE,
            concept VARCHAR(255) NOT NULL,
            image_url TEXT NOT NULL,
            grade_level VARCHAR(50),
            description TEXT NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_visualizers_lesson_plan_id ON visualizers(lesson_plan_id);"
    )

    op.execute(
        """
        CREATE TABLE teacher_notes (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            lesson_plan_id UUID NOT NULL REFERENCES lesson_plans(id) ON DELETE CASCADE,
            teacher_id VARCHAR(255) NOT NULL,
            note_content TEXT NOT NULL,
            note_type VARCHAR(20) NOT NULL DEFAULT 'general'
                CHECK (note_type IN ('behavioral', 'academic', 'general')),
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_teacher_notes_lesson_plan_id ON teacher_notes(lesson_plan_id);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS teacher_notes;")
    op.execute("DROP TABLE IF EXISTS visualizers;")
    op.execute("DROP TABLE IF EXISTS break_reminders;")
    op.execute("DROP TABLE IF EXISTS coaching_tips;")
    op.execute("DROP TABLE IF EXISTS lesson_plans;")
