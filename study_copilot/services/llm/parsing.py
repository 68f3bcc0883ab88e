from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from study_copilot.models.artifacts import Flashcard, Notes, Quiz, Summary

T = TypeVar("T")

DEGRADED_MAIN_POINTS = 5


# ----------------------------
# Parse outcomes
# ----------------------------

@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T


@dataclass(frozen=True)
class MalformedShape:
    reason: str


@dataclass(frozen=True)
class NotJson:
    reason: str


ParseResult = Union[Parsed, MalformedShape, NotJson]


_FENCE_OPEN_RE = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE_RE = re.compile(r"\s*```$")


def _strip_fences(text: str) -> str:
    s = _FENCE_OPEN_RE.sub("", text.strip())
    return _FENCE_CLOSE_RE.sub("", s).strip()


def _extract_json(text: str, brackets: tuple[str, str]) -> Any:
    """
    Best-effort JSON extraction if the model wraps the payload in prose or a
    code fence. Raises ValueError when nothing parses.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValueError("empty response")
    # a bare fence strips to nothing; search the raw reply instead
    text = _strip_fences(raw) or raw

    # Fast path
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # Outermost object/array
    opener, closer = brackets
    start = text.find(opener)
    end = text.rfind(closer)
    if start >= 0 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}") from e

    raise ValueError(f"non-JSON response. First 200 chars: {text[:200]!r}")


def _first_error(e: ValidationError) -> str:
    errs = e.errors()
    if not errs:
        return str(e)
    loc = ".".join(str(p) for p in errs[0].get("loc", ()))
    return f"{loc}: {errs[0].get('msg')}" if loc else str(errs[0].get("msg"))


def _parse_object(raw: str) -> dict | MalformedShape | NotJson:
    try:
        data = _extract_json(raw, ("{", "}"))
    except ValueError as e:
        return NotJson(reason=str(e))
    if not isinstance(data, dict):
        return MalformedShape(reason=f"expected a JSON object, got {type(data).__name__}")
    return data


# ----------------------------
# Per-artifact parsers
# ----------------------------

def parse_summary(raw: str) -> ParseResult:
    data = _parse_object(raw)
    if not isinstance(data, dict):
        return data
    try:
        return Parsed(Summary.model_validate(data))
    except ValidationError as e:
        return MalformedShape(reason=_first_error(e))


def parse_notes(raw: str, style: str) -> ParseResult:
    data = _parse_object(raw)
    if not isinstance(data, dict):
        return data
    data.setdefault("style", style)
    try:
        return Parsed(Notes.model_validate(data))
    except ValidationError as e:
        return MalformedShape(reason=_first_error(e))


_FLASHCARDS = TypeAdapter(list[Flashcard])


def parse_flashcards(raw: str, count: int) -> ParseResult:
    try:
        data = _extract_json(raw, ("[", "]"))
    except ValueError as e:
        return NotJson(reason=str(e))

    if not isinstance(data, list):
        return MalformedShape(reason=f"expected a JSON array, got {type(data).__name__}")

    try:
        cards = _FLASHCARDS.validate_python(data)
    except ValidationError as e:
        return MalformedShape(reason=_first_error(e))

    ids = [c.id for c in cards]
    if len(ids) != len(set(ids)):
        return MalformedShape(reason="flashcard ids must be unique")

    return Parsed(cards[: max(0, count)])


def parse_quiz(raw: str, difficulty: str) -> ParseResult:
    data = _parse_object(raw)
    if not isinstance(data, dict):
        return data
    data.setdefault("difficulty", difficulty)
    data.setdefault("title", f"{difficulty[:1].upper()}{difficulty[1:]} Quiz")
    try:
        return Parsed(Quiz.model_validate(data))
    except ValidationError as e:
        return MalformedShape(reason=_first_error(e))


def summary_from_raw_text(raw: str) -> Summary:
    """
    Degraded summary for a model reply that is not JSON: the prose itself is
    still a usable summary.
    """
    lines = [ln.strip() for ln in (raw or "").splitlines() if ln.strip()]
    return Summary(
        overview=lines[0] if lines else "",
        main_points=lines[:DEGRADED_MAIN_POINTS],
        key_topics=[],
    )
