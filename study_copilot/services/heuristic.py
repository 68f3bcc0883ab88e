from __future__ import annotations

import math
import re

from study_copilot.models.artifacts import (
    Flashcard,
    Notes,
    NoteSection,
    Quiz,
    QuizQuestion,
    Summary,
)

# ----------------------------
# Text helpers
# ----------------------------

# A sentence is a run of non-terminators plus its run of terminators.
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]*")
_TERMINATORS = ".!?"

SUMMARY_PLACEHOLDER = "Content summary not available."
NOTES_TITLE = "Study Notes"
FLASHCARD_CATEGORY = "General"
QUIZ_OPTIONS = ("Option A", "Option B", "Option C", "Option D")

MAX_MAIN_POINTS = 3
MAX_KEY_TOPICS = 5
MIN_TOPIC_LEN = 7
MAX_NOTE_POINTS = 8
MAIN_SECTION_SIZE = 4
MIN_FLASHCARD_WORDS = 4
QUESTION_WORDS = 8


def split_sentences(text: str) -> list[str]:
    """
    Split on runs of . ! ? keeping the terminators with their sentence.
    Fragments with no words (whitespace or bare punctuation) are dropped.
    """
    out: list[str] = []
    for m in _SENTENCE_RE.finditer(text or ""):
        s = m.group(0).strip()
        if s.rstrip(_TERMINATORS).strip():
            out.append(s)
    return out


def _words(sentence: str) -> list[str]:
    return sentence.split()


def _unterminated(s: str) -> str:
    return s.rstrip(_TERMINATORS).rstrip()


def _key_topics(text: str, limit: int = MAX_KEY_TOPICS) -> list[str]:
    seen: set[str] = set()
    topics: list[str] = []
    # tokens keep their punctuation, which counts toward the length
    for w in (text or "").split():
        if len(w) < MIN_TOPIC_LEN or w in seen:
            continue
        seen.add(w)
        topics.append(w)
        if len(topics) >= limit:
            break
    return topics


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


# ----------------------------
# Heuristic generators
# ----------------------------

def summary_heuristic(text: str) -> Summary:
    sents = split_sentences(text)
    overview = f"{_unterminated(sents[0])}..." if sents else SUMMARY_PLACEHOLDER
    return Summary(
        overview=overview,
        main_points=sents[:MAX_MAIN_POINTS],
        key_topics=_key_topics(text),
    )


def notes_heuristic(text: str, style: str = "bullet") -> Notes:
    sents = split_sentences(text)
    points = [f"{i}. {s}" for i, s in enumerate(sents[:MAX_NOTE_POINTS], start=1)]
    return Notes(
        title=NOTES_TITLE,
        style=style,
        points=points,
        sections=[
            NoteSection(heading="Main Content", items=points[:MAIN_SECTION_SIZE]),
            NoteSection(heading="Additional Points", items=points[MAIN_SECTION_SIZE:]),
        ],
    )


def flashcards_heuristic(text: str, count: int = 10) -> list[Flashcard]:
    """
    One card per sentence among the first `count`; short sentences are
    skipped, so ids keep the sentence position and may have gaps.
    """
    sents = split_sentences(text)
    cards: list[Flashcard] = []
    for i, sentence in enumerate(sents[: max(0, count)], start=1):
        words = _words(sentence)
        if len(words) < MIN_FLASHCARD_WORDS:
            continue
        half = " ".join(words[: math.ceil(len(words) / 2)])
        cards.append(
            Flashcard(
                id=i,
                front=f"What is: {half}?",
                back=sentence,
                category=FLASHCARD_CATEGORY,
            )
        )
    return cards


def quiz_heuristic(text: str, question_count: int = 5, difficulty: str = "medium") -> Quiz:
    # Option A is correct by construction; the heuristic cannot judge truth.
    sents = split_sentences(text)
    questions: list[QuizQuestion] = []
    for i, sentence in enumerate(sents[: max(0, question_count)], start=1):
        lead = _unterminated(" ".join(_words(sentence)[:QUESTION_WORDS]))
        questions.append(
            QuizQuestion(
                id=i,
                question=f"Question about: {lead}?",
                options=list(QUIZ_OPTIONS),
                correct_answer=0,
                explanation=sentence,
            )
        )
    return Quiz(
        title=f"{_capitalize(difficulty)} Quiz",
        difficulty=difficulty,
        questions=questions,
    )
