from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from study_copilot.models.artifacts import Artifact, Flashcard, Notes, Quiz, Summary
from study_copilot.services import heuristic
from study_copilot.services.llm import parsing, prompts
from study_copilot.services.llm.invoker import Failed, ModelClient, Success, Unavailable, invoke_model

logger = logging.getLogger(__name__)


class Variant(str, Enum):
    SUMMARY = "summary"
    NOTES = "notes"
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"


class Resolution(str, Enum):
    MODEL = "model"
    DEGRADED = "degraded"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class NotesOptions:
    style: str = "bullet"


@dataclass(frozen=True)
class FlashcardsOptions:
    count: int = 10


@dataclass(frozen=True)
class QuizOptions:
    question_count: int = 5
    difficulty: str = "medium"


VariantOptions = Union[NotesOptions, FlashcardsOptions, QuizOptions, None]

_DEFAULT_OPTIONS = {
    Variant.SUMMARY: None,
    Variant.NOTES: NotesOptions(),
    Variant.FLASHCARDS: FlashcardsOptions(),
    Variant.QUIZ: QuizOptions(),
}


@dataclass(frozen=True)
class Generation:
    artifact: Artifact
    variant: Variant
    resolution: Resolution
    provider: str
    error: str | None = None


@dataclass(frozen=True)
class _Plan:
    prompt: prompts.Prompt
    parse: Callable[[str], parsing.ParseResult]
    fallback: Callable[[], Artifact]
    # Called with the raw reply when it is not JSON at all; None means use fallback.
    salvage: Callable[[str], Artifact] | None = None


def _plan(variant: Variant, text: str, options: VariantOptions) -> _Plan:
    if variant == Variant.SUMMARY:
        return _Plan(
            prompt=prompts.summary_prompt(text),
            parse=parsing.parse_summary,
            fallback=lambda: heuristic.summary_heuristic(text),
            salvage=parsing.summary_from_raw_text,
        )

    if variant == Variant.NOTES:
        style = options.style
        return _Plan(
            prompt=prompts.notes_prompt(text, style),
            parse=lambda raw: parsing.parse_notes(raw, style),
            fallback=lambda: heuristic.notes_heuristic(text, style),
        )

    if variant == Variant.FLASHCARDS:
        count = options.count
        return _Plan(
            prompt=prompts.flashcards_prompt(text, count),
            parse=lambda raw: parsing.parse_flashcards(raw, count),
            fallback=lambda: heuristic.flashcards_heuristic(text, count),
        )

    if variant == Variant.QUIZ:
        qc, difficulty = options.question_count, options.difficulty
        return _Plan(
            prompt=prompts.quiz_prompt(text, qc, difficulty),
            parse=lambda raw: parsing.parse_quiz(raw, difficulty),
            fallback=lambda: heuristic.quiz_heuristic(text, qc, difficulty),
        )

    raise ValueError(f"Unknown variant: {variant}")


def _provider_name(client: ModelClient | None) -> str:
    if client is None:
        return "heuristic"
    return getattr(client, "name", type(client).__name__)


def generate_with_meta(
    variant: Variant | str,
    text: str,
    options: VariantOptions = None,
    client: ModelClient | None = None,
) -> Generation:
    """
    Model first, heuristics second. Every model-side problem (no client,
    failed call, unparseable reply) resolves to a usable artifact; this
    function does not raise for any non-empty text.

    Summary is the one variant that salvages a non-JSON reply as a degraded
    result instead of running the heuristic generator.
    """
    variant = Variant(variant)
    opts = options if options is not None else _DEFAULT_OPTIONS[variant]
    plan = _plan(variant, text, opts)
    provider = _provider_name(client)

    outcome = invoke_model(client, plan.prompt)

    if isinstance(outcome, Unavailable):
        logger.info("generate variant=%s resolution=fallback reason=model_unconfigured", variant.value)
        return Generation(plan.fallback(), variant, Resolution.FALLBACK, "heuristic")

    if isinstance(outcome, Failed):
        logger.info("generate variant=%s resolution=fallback reason=model_failed", variant.value)
        return Generation(plan.fallback(), variant, Resolution.FALLBACK, "heuristic", error=outcome.reason)

    if not isinstance(outcome, Success):
        raise TypeError(f"Unexpected model outcome: {outcome!r}")

    result = plan.parse(outcome.text)

    if isinstance(result, parsing.Parsed):
        logger.info("generate variant=%s resolution=model provider=%s", variant.value, provider)
        return Generation(result.value, variant, Resolution.MODEL, provider)

    reason = f"{type(result).__name__}: {result.reason}"
    logger.warning("model_reply_unparsed variant=%s provider=%s %s", variant.value, provider, reason)

    # only a non-JSON reply is salvaged; wrong-shape JSON falls back
    if plan.salvage is not None and isinstance(result, parsing.NotJson):
        return Generation(plan.salvage(outcome.text), variant, Resolution.DEGRADED, provider, error=reason)
    return Generation(plan.fallback(), variant, Resolution.FALLBACK, "heuristic", error=reason)


def generate(
    variant: Variant | str,
    text: str,
    options: VariantOptions = None,
    client: ModelClient | None = None,
) -> Artifact:
    return generate_with_meta(variant, text, options, client).artifact


def generate_summary(text: str, client: ModelClient | None = None) -> Summary:
    return generate(Variant.SUMMARY, text, None, client)


def generate_notes(text: str, style: str = "bullet", client: ModelClient | None = None) -> Notes:
    return generate(Variant.NOTES, text, NotesOptions(style=style), client)


def generate_flashcards(text: str, count: int = 10, client: ModelClient | None = None) -> list[Flashcard]:
    return generate(Variant.FLASHCARDS, text, FlashcardsOptions(count=count), client)


def generate_quiz(
    text: str,
    question_count: int = 5,
    difficulty: str = "medium",
    client: ModelClient | None = None,
) -> Quiz:
    return generate(Variant.QUIZ, text, QuizOptions(question_count=question_count, difficulty=difficulty), client)
