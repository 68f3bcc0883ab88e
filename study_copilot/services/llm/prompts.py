from __future__ import annotations

from dataclasses import dataclass

# Only this much source text goes to the model; heuristics still see all of it.
MAX_MODEL_INPUT_CHARS = 4000

TEMPERATURE = 0.7
SUMMARY_MAX_TOKENS = 500
NOTES_MAX_TOKENS = 800
FLASHCARDS_MAX_TOKENS = 1000
QUIZ_MAX_TOKENS = 1200


@dataclass(frozen=True)
class Prompt:
    system: str
    user: str
    max_tokens: int
    temperature: float = TEMPERATURE


SUMMARY_SYSTEM = (
    "You are a helpful assistant that creates concise and informative summaries. "
    "Return your response as a JSON object with 'mainPoints' (array of key points), "
    "'keyTopics' (array of main topics), and 'overview' (brief overview paragraph)."
)

NOTES_STYLE_INSTRUCTIONS = {
    "bullet": "Create bullet point notes with clear, concise points.",
    "outline": "Create an outline format with main headings and sub-points.",
    "detailed": "Create detailed notes with explanations and examples.",
}

NOTES_SYSTEM_TEMPLATE = (
    "You are a helpful assistant that creates study notes. {style_instruction} "
    "Return your response as a JSON object with 'title', 'style', 'sections' "
    "(array of objects with 'heading' and 'items' array), and 'points' (array of all points)."
)

FLASHCARDS_SYSTEM_TEMPLATE = (
    "You are a helpful assistant that creates flashcards for studying. "
    "Create {count} flashcards with clear questions and answers. "
    "Return your response as a JSON array of objects, each with 'id', 'front' (question), "
    "'back' (answer), and 'category' properties."
)

QUIZ_SYSTEM_TEMPLATE = (
    "You are a helpful assistant that creates quizzes for studying. "
    "Create a {difficulty} level quiz with {question_count} multiple choice questions. "
    "Return your response as a JSON object with 'title', 'difficulty', 'questions' "
    "(array of objects with 'id', 'question', 'options' array of exactly 4 strings, "
    "'correctAnswer' index, and 'explanation'), and 'totalPoints'."
)


def clip_for_model(text: str, max_chars: int = MAX_MODEL_INPUT_CHARS) -> str:
    return (text or "")[:max_chars]


def summary_prompt(text: str) -> Prompt:
    return Prompt(
        system=SUMMARY_SYSTEM,
        user=f"Please summarize the following content:\n\n{clip_for_model(text)}",
        max_tokens=SUMMARY_MAX_TOKENS,
    )


def notes_prompt(text: str, style: str) -> Prompt:
    instruction = NOTES_STYLE_INSTRUCTIONS.get(style, NOTES_STYLE_INSTRUCTIONS["bullet"])
    return Prompt(
        system=NOTES_SYSTEM_TEMPLATE.format(style_instruction=instruction),
        user=f"Create {style} notes from the following content:\n\n{clip_for_model(text)}",
        max_tokens=NOTES_MAX_TOKENS,
    )


def flashcards_prompt(text: str, count: int) -> Prompt:
    return Prompt(
        system=FLASHCARDS_SYSTEM_TEMPLATE.format(count=count),
        user=f"Create {count} flashcards from the following content:\n\n{clip_for_model(text)}",
        max_tokens=FLASHCARDS_MAX_TOKENS,
    )


def quiz_prompt(text: str, question_count: int, difficulty: str) -> Prompt:
    return Prompt(
        system=QUIZ_SYSTEM_TEMPLATE.format(difficulty=difficulty, question_count=question_count),
        user=(
            f"Create a {difficulty} quiz with {question_count} questions "
            f"from the following content:\n\n{clip_for_model(text)}"
        ),
        max_tokens=QUIZ_MAX_TOKENS,
    )
