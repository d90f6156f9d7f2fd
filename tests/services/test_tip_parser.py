from focusflow.schemas.lesson import TipType
from focusflow.services.tip_parser import (
    MAX_TIPS,
    CoachingTip,
    classify_tip_type,
    parse_coaching_tips,
)


def tip_block(tip_type: str, suggestion: str, why: str = "It helps focus.") -> str:
    return (
        f"- **Tip Type**: {tip_type}\n"
        f"- **Suggestion**: {suggestion}\n"
        f"- **Why**: {why}\n"
    )


def test_three_well_formed_groups():
    text = "\n".join(
        [
            tip_block("break", "Stretch every 10 minutes."),
            tip_block("visual", "Draw a diagram."),
            tip_block("movement", "Act out the steps."),
        ]
    )

    tips = parse_coaching_tips(text)

    assert [t.type for t in tips] == [TipType.BREAK, TipType.VISUAL, TipType.MOVEMENT]
    assert [t.suggestion for t in tips] == [
        "Stretch every 10 minutes.",
        "Draw a diagram.",
        "Act out the steps.",
    ]


def test_truncates_to_seven_tips():
    text = "\n".join(tip_block("engagement", f"Suggestion number {i}") for i in range(10))

    tips = parse_coaching_tips(text)

    assert len(tips) == MAX_TIPS == 7
    assert tips[0].suggestion == "Suggestion number 0"
    assert tips[-1].suggestion == "Suggestion number 6"


def test_continuation_lines_are_joined_with_single_spaces():
    text = (
        "**Tip Type**: attention\n"
        "**Suggestion**: Use a quiet signal\n"
        "such as a raised hand\n"
        "  before giving instructions.\n"
        "**Tip Type**: break\n"
        "**Suggestion**: Short break.\n"
    )

    tips = parse_coaching_tips(text)

    assert tips[0] == CoachingTip(
        type=TipType.ATTENTION,
        suggestion="Use a quiet signal such as a raised hand before giving instructions.",
    )
    assert tips[1] == CoachingTip(type=TipType.BREAK, suggestion="Short break.")


def test_empty_input_returns_nothing():
    assert parse_coaching_tips("") == []
    assert parse_coaching_tips("\n  \n\t\n") == []


def test_why_lines_are_dropped():
    text = tip_block("visual", "Color-code steps.", why="Color cues aid recall.")
    tips = parse_coaching_tips(text)
    assert tips == [CoachingTip(type=TipType.VISUAL, suggestion="Color-code steps.")]


def test_only_why_lines_yield_nothing():
    assert parse_coaching_tips("**Why**: because\n**Why**: again") == []


def test_prose_before_any_suggestion_is_ignored():
    text = "Here are some tips for your lesson!\n" + tip_block("movement", "Walk and talk.")
    tips = parse_coaching_tips(text)
    assert tips == [CoachingTip(type=TipType.MOVEMENT, suggestion="Walk and talk.")]


def test_suggestion_without_type_marker_defaults_to_engagement():
    tips = parse_coaching_tips("**Suggestion**: Ask a question every 5 minutes.")
    assert tips == [
        CoachingTip(type=TipType.ENGAGEMENT, suggestion="Ask a question every 5 minutes.")
    ]


def test_later_suggestion_overwrites_earlier_one():
    text = "**Tip Type**: visual\n**Suggestion**: first\n**Suggestion**: second"
    tips = parse_coaching_tips(text)
    assert tips == [CoachingTip(type=TipType.VISUAL, suggestion="second")]


def test_type_marker_without_suggestion_emits_nothing():
    text = "**Tip Type**: break\n**Why**: no suggestion given\n" + tip_block(
        "visual", "Show pictures."
    )
    tips = parse_coaching_tips(text)
    assert tips == [CoachingTip(type=TipType.VISUAL, suggestion="Show pictures.")]


def test_classification_order_is_first_match_wins():
    assert classify_tip_type("**Tip Type**: Visual break") == TipType.BREAK
    assert classify_tip_type("**Tip Type**: movement / visual") == TipType.VISUAL
    assert classify_tip_type("**Tip Type**: ATTENTION and movement") == TipType.MOVEMENT
    assert classify_tip_type("**Tip Type**: Attention") == TipType.ATTENTION
    assert classify_tip_type("**Tip Type**: sensory") == TipType.ENGAGEMENT
