from study_copilot.models.artifacts import (
    Artifact,
    Flashcard,
    FlashcardSet,
    Notes,
    NoteSection,
    Quiz,
    QuizQuestion,
    Summary,
)
from study_copilot.models.content import (
    ContentSource,
    ExtractionError,
    ExtractionErrorKind,
    NormalizedContent,
    SourceKind,
)

__all__ = [
    "Artifact",
    "ContentSource",
    "ExtractionError",
    "ExtractionErrorKind",
    "Flashcard",
    "FlashcardSet",
    "NormalizedContent",
    "NoteSection",
    "Notes",
    "Quiz",
    "QuizQuestion",
    "SourceKind",
    "Summary",
]
