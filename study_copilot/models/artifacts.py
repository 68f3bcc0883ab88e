from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

POINTS_PER_QUESTION = 10


class ArtifactModel(BaseModel):
    """
    Base for generated artifacts.

    Attributes are snake_case; the wire names (aliases) are the camelCase
    names the presentation layer expects, so dump with by_alias=True.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class Summary(ArtifactModel):
    overview: str
    main_points: list[str] = Field(default_factory=list)
    key_topics: list[str] = Field(default_factory=list)

    @field_validator("key_topics")
    @classmethod
    def _dedupe_topics(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        out: list[str] = []
        for t in v:
            if t in seen:
                continue
            seen.add(t)
            out.append(t)
        return out


class NoteSection(ArtifactModel):
    heading: str
    items: list[str] = Field(default_factory=list)


class Notes(ArtifactModel):
    title: str
    style: str
    sections: list[NoteSection]
    points: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _flatten_points(self) -> "Notes":
        # flat view for clients that ignore sections
        if not self.points:
            self.points = [it for s in self.sections for it in s.items]
        return self


class Flashcard(ArtifactModel):
    id: int = Field(ge=1)
    front: str
    back: str
    category: str = "General"


class QuizQuestion(ArtifactModel):
    id: int = Field(ge=1)
    question: str
    options: list[str] = Field(min_length=4, max_length=4)
    correct_answer: int = Field(ge=0, le=3)
    explanation: str = ""


class Quiz(ArtifactModel):
    title: str
    difficulty: str
    questions: list[QuizQuestion]
    total_points: int = 0

    @field_validator("questions")
    @classmethod
    def _unique_ids(cls, v: list[QuizQuestion]) -> list[QuizQuestion]:
        ids = [q.id for q in v]
        if len(ids) != len(set(ids)):
            raise ValueError("question ids must be unique")
        return v

    @model_validator(mode="after")
    def _score(self) -> "Quiz":
        self.total_points = POINTS_PER_QUESTION * len(self.questions)
        return self


FlashcardSet = list[Flashcard]

Artifact = Union[Summary, Notes, FlashcardSet, Quiz]


def artifact_payload(artifact: Artifact) -> dict | list:
    if isinstance(artifact, list):
        return [card.to_payload() for card in artifact]
    return artifact.to_payload()
