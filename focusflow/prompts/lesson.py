"""Prompt templates for lesson adaptation, coaching tips and visualizers."""

from dataclasses import dataclass


@dataclass
class LessonContext:
    content: str
    subject: str
    grade_level: str


ADAPTATION_SYSTEM_PROMPT = (
    "You are an ADHD education specialist. Adapt lesson plans to be more "
    "ADHD-friendly by breaking content into smaller chunks, adding engagement "
    "points, suggesting visual aids, and incorporating movement breaks."
)

COACHING_TIPS_SYSTEM_PROMPT = (
    "You are an ADHD education specialist. Analyze lesson plans and provide "
    "specific, actionable coaching tips for teachers to better support ADHD "
    "students. Focus on attention management, engagement strategies, break "
    "timing, and sensory considerations."
)


def build_adaptation_prompt(lesson: LessonContext) -> str:
    return f"""Adapt this {lesson.subject} lesson for grade {lesson.grade_level} to be ADHD-friendly:

Original Lesson:
{lesson.content}

Please provide:
1. **Chunked Content**: Break into 10-15 minute segments
2. **Engagement Points**: Interactive elements throughout
3. **Visual Aids Needed**: Specific suggestions for visual supports
4. **Movement Breaks**: Strategic break points and activities
5. **Attention Grabbers**: Hooks to maintain focus"""


def build_coaching_tips_prompt(lesson: LessonContext) -> str:
    # The tip parser depends on the three bolded labels below.
    return f"""Analyze this {lesson.subject} lesson for grade {lesson.grade_level} and provide 5-7 specific ADHD-friendly coaching tips:

Lesson Content:
{lesson.content}

Please provide tips in this format:
- **Tip Type**: [engagement/break/visual/movement/attention]
- **Suggestion**: [specific actionable tip]
- **Why**: [brief explanation of ADHD benefit]"""


def build_visualizer_prompt(concept: str, grade_level: str) -> str:
    return f"""Create an educational illustration for grade {grade_level} students that visually explains the concept of "{concept}". The image should be:
- Clear and simple with bright, engaging colors
- Cartoon or illustration style (not photorealistic)
- Educational and age-appropriate
- Designed to help ADHD students understand abstract concepts
- Include visual metaphors or analogies when helpful"""
