"""Keyword-based extraction of concepts worth illustrating."""

FALLBACK_CONCEPT = "lesson concept diagram"

# Callers generate at most this many images per lesson.
MAX_VISUAL_CONCEPTS = 2

# (keyword searched in the lower-cased lesson, concept label), in scan order
CONCEPT_VOCABULARY: list[tuple[str, str]] = [
    # Science
    ("water cycle", "water cycle"),
    ("evaporation", "evaporation"),
    ("condensation", "condensation"),
    ("precipitation", "precipitation"),
    # Math
    ("fraction", "fractions"),
    ("multiplication", "multiplication"),
    ("division", "division"),
]


def extract_concepts(content: str) -> list[str]:
    """
    Find the known concepts mentioned in a lesson.

    Labels come back in vocabulary order, each at most once. When nothing
    matches, a single generic placeholder concept is returned so the caller
    always has something to illustrate.
    """
    text = (content or "").lower()
    concepts: list[str] = []

    for keyword, label in CONCEPT_VOCABULARY:
        if keyword in text and label not in concepts:
            concepts.append(label)

    if not concepts:
        concepts.append(FALLBACK_CONCEPT)

    return concepts
