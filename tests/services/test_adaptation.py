import pytest

from conftest import ADAPTED_TEXT, TIPS_TEXT
from focusflow.exceptions import GenerationError, PersistenceError, ValidationError
from focusflow.schemas.lesson import AdaptLessonRequest, TipType
from focusflow.services.adaptation import adapt_lesson
from focusflow.services.break_policy import BREAK_REMINDER_TEXT, interval_minutes

LESSON_PLAN_ID = "6f1c2a52-3d0b-4d8e-9a55-5a3f3e2b9c10"


def make_request(**overrides) -> AdaptLessonRequest:
    fields = {
        "lessonPlanId": LESSON_PLAN_ID,
        "content": "Today we explore fractions using pizza slices.",
        "subject": "Math",
        "gradeLevel": "3rd Grade",
        **overrides,
    }
    return AdaptLessonRequest.model_validate(fields)


@pytest.mark.asyncio
async def test_adapt_lesson_persists_everything(fake_store, fake_generator):
    result = await adapt_lesson(make_request(), fake_store, fake_generator)

    assert result.adapted_content == ADAPTED_TEXT
    assert result.coaching_tips_text == TIPS_TEXT
    assert result.break_interval == interval_minutes("3rd Grade") == 15
    assert result.failed_writes == []

    updates = fake_store.calls_for("update", "lesson_plans")
    assert len(updates) == 1
    assert updates[0]["filters"] == {"id": LESSON_PLAN_ID}
    assert updates[0]["adhd_adapted_content"] == ADAPTED_TEXT

    tip_inserts = fake_store.calls_for("insert", "coaching_tips")
    assert [t["tip_type"] for t in tip_inserts] == ["break", "visual", "movement"]
    assert all(t["lesson_plan_id"] == LESSON_PLAN_ID for t in tip_inserts)
    assert tip_inserts[0]["tip_text"] == "Pause every 10 minutes for a stretch."

    reminders = fake_store.calls_for("insert", "break_reminders")
    assert reminders == [
        {
            "lesson_plan_id": LESSON_PLAN_ID,
            "interval_minutes": 15,
            "reminder_text": BREAK_REMINDER_TEXT,
            "is_active": True,
        }
    ]


@pytest.mark.asyncio
async def test_generation_calls_are_sequential_and_use_lesson_details(
    fake_store, fake_generator
):
    await adapt_lesson(make_request(), fake_store, fake_generator)

    assert len(fake_generator.calls) == 2
    for _, user_prompt in fake_generator.calls:
        assert "Math" in user_prompt
        assert "3rd Grade" in user_prompt
        assert "pizza slices" in user_prompt
    assert "**Tip Type**" in fake_generator.calls[1][1]


@pytest.mark.asyncio
async def test_tip_inserts_are_capped_at_seven(fake_store, fake_generator):
    fake_generator.tips = "\n".join(
        f"**Tip Type**: movement\n**Suggestion**: Move {i}\n**Why**: energy"
        for i in range(9)
    )

    result = await adapt_lesson(make_request(), fake_store, fake_generator)

    assert len(result.tips) == 7
    assert len(fake_store.calls_for("insert", "coaching_tips")) == 7
    assert len(fake_store.calls_for("insert", "break_reminders")) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "missing", ["lessonPlanId", "content", "subject", "gradeLevel"]
)
async def test_missing_field_fails_before_any_call(fake_store, fake_generator, missing):
    with pytest.raises(ValidationError) as exc_info:
        await adapt_lesson(make_request(**{missing: None}), fake_store, fake_generator)

    assert exc_info.value.status_code == 400
    assert missing in exc_info.value.details["fields"]
    assert fake_generator.calls == []
    assert fake_store.calls == []


@pytest.mark.asyncio
async def test_blank_content_counts_as_missing(fake_store, fake_generator):
    with pytest.raises(ValidationError):
        await adapt_lesson(make_request(content="   "), fake_store, fake_generator)
    assert fake_generator.calls == []


@pytest.mark.asyncio
async def test_adaptation_failure_persists_nothing(fake_store, fake_generator):
    fake_generator.fail_adaptation = True

    with pytest.raises(GenerationError):
        await adapt_lesson(make_request(), fake_store, fake_generator)

    assert fake_store.calls == []
    assert len(fake_generator.calls) == 1


@pytest.mark.asyncio
async def test_empty_adaptation_is_a_generation_error(fake_store, fake_generator):
    fake_generator.adapted = ""

    with pytest.raises(GenerationError):
        await adapt_lesson(make_request(), fake_store, fake_generator)

    assert fake_store.calls == []


@pytest.mark.asyncio
async def test_tip_failure_keeps_adaptation_update(fake_store, fake_generator):
    fake_generator.fail_tips = True

    with pytest.raises(GenerationError):
        await adapt_lesson(make_request(), fake_store, fake_generator)

    assert len(fake_store.calls_for("update", "lesson_plans")) == 1
    assert fake_store.calls_for("insert", "coaching_tips") == []
    assert fake_store.calls_for("insert", "break_reminders") == []


@pytest.mark.asyncio
async def test_update_failure_is_a_persistence_error(fake_store, fake_generator):
    fake_store.fail_tables.add("lesson_plans")

    with pytest.raises(PersistenceError):
        await adapt_lesson(make_request(), fake_store, fake_generator)

    assert len(fake_generator.calls) == 1
    assert fake_store.calls_for("insert", "coaching_tips") == []


@pytest.mark.asyncio
async def test_failed_tip_insert_does_not_stop_later_writes(fake_store, fake_generator):
    fake_store.fail_inserts.add(("coaching_tips", 1))

    result = await adapt_lesson(make_request(), fake_store, fake_generator)

    assert len(fake_store.calls_for("insert", "coaching_tips")) == 3
    assert len(fake_store.rows("coaching_tips")) == 2
    assert len(fake_store.rows("break_reminders")) == 1
    assert [w.operation for w in result.failed_writes] == ["insert_coaching_tip[1]"]
    assert result.failed_writes[0].error == "insert failed"


@pytest.mark.asyncio
async def test_failed_break_reminder_is_reported(fake_store, fake_generator):
    fake_store.fail_tables.add("break_reminders")

    result = await adapt_lesson(make_request(), fake_store, fake_generator)

    assert [w.operation for w in result.failed_writes] == ["insert_break_reminder"]
    assert len(fake_store.rows("coaching_tips")) == 3


@pytest.mark.asyncio
async def test_empty_tip_text_skips_tip_inserts(fake_store, fake_generator):
    fake_generator.tips = ""

    result = await adapt_lesson(make_request(), fake_store, fake_generator)

    assert result.tips == []
    assert fake_store.calls_for("insert", "coaching_tips") == []
    assert len(fake_store.calls_for("insert", "break_reminders")) == 1


@pytest.mark.asyncio
async def test_unknown_grade_uses_default_interval(fake_store, fake_generator):
    result = await adapt_lesson(
        make_request(gradeLevel="Year 4"), fake_store, fake_generator
    )

    assert result.break_interval == 20
    assert fake_store.calls_for("insert", "break_reminders")[0]["interval_minutes"] == 20
