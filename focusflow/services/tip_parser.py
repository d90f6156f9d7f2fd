"""
Parser for the coaching-tip text returned by the text model.

The tips prompt asks for one block per tip:

    - **Tip Type**: [engagement/break/visual/movement/attention]
    - **Suggestion**: [specific actionable tip]
    - **Why**: [brief explanation of ADHD benefit]

The model does not always follow the format, so parsing is line based and
never fails: malformed input just yields fewer tips. "Why" lines are dropped,
and unlabeled lines following a suggestion are folded into it.
"""

from dataclasses import dataclass, replace

from focusflow.schemas.lesson import TipType

MAX_TIPS = 7

TIP_TYPE_MARKER = "**Tip Type**:"
SUGGESTION_MARKER = "**Suggestion**:"
WHY_MARKER = "**Why**:"

# First match wins, so the order matters.
_TYPE_KEYWORDS: list[tuple[str, TipType]] = [
    ("break", TipType.BREAK),
    ("visual", TipType.VISUAL),
    ("movement", TipType.MOVEMENT),
    ("attention", TipType.ATTENTION),
]


@dataclass(frozen=True)
class CoachingTip:
    type: TipType
    suggestion: str


def classify_tip_type(line: str) -> TipType:
    lowered = line.lower()
    for keyword, tip_type in _TYPE_KEYWORDS:
        if keyword in lowered:
            return tip_type
    return TipType.ENGAGEMENT


def parse_coaching_tips(tips_text: str) -> list[CoachingTip]:
    """Turn raw tip text into at most ``MAX_TIPS`` coaching tips."""
    tips: list[CoachingTip] = []
    current = CoachingTip(type=TipType.ENGAGEMENT, suggestion="")

    lines = [line for line in (tips_text or "").split("\n") if line.strip()]

    for line in lines:
        if TIP_TYPE_MARKER in line:
            if current.suggestion:
                tips.append(current)
            current = CoachingTip(type=classify_tip_type(line), suggestion="")
        elif SUGGESTION_MARKER in line:
            suggestion = line.split(SUGGESTION_MARKER, 1)[1].strip()
            current = replace(current, suggestion=suggestion)
        elif current.suggestion and WHY_MARKER not in line:
            current = replace(
                current, suggestion=f"{current.suggestion} {line.strip()}"
            )

    if current.suggestion:
        tips.append(current)

    return tips[:MAX_TIPS]
