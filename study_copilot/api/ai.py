from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from study_copilot.api.deps import get_model_client
from study_copilot.models.artifacts import artifact_payload
from study_copilot.services.llm.invoker import ModelClient
from study_copilot.services.study_materials import (
    FlashcardsOptions,
    NotesOptions,
    QuizOptions,
    Variant,
    generate_with_meta,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


class SummarizeRequest(BaseModel):
    content: str = Field(..., min_length=1)
    type: str | None = None


class NotesRequest(BaseModel):
    content: str = Field(..., min_length=1)
    style: Literal["bullet", "outline", "detailed"] = "bullet"


class FlashcardsRequest(BaseModel):
    content: str = Field(..., min_length=1)
    count: int = Field(10, ge=0)


class QuizRequest(BaseModel):
    content: str = Field(..., min_length=1)
    questionCount: int = Field(5, ge=0)
    difficulty: Literal["easy", "medium", "hard"] = "medium"


def _meta(gen) -> dict:
    return {"provider": gen.provider, "resolution": gen.resolution.value}


@router.post("/summarize")
def summarize(req: SummarizeRequest, client: ModelClient | None = Depends(get_model_client)):
    logger.info("summarize source_type=%s chars=%d", req.type or "unknown", len(req.content))
    gen = generate_with_meta(Variant.SUMMARY, req.content, None, client)
    return {"success": True, "summary": artifact_payload(gen.artifact), "type": "summary", **_meta(gen)}


@router.post("/notes")
def notes(req: NotesRequest, client: ModelClient | None = Depends(get_model_client)):
    gen = generate_with_meta(Variant.NOTES, req.content, NotesOptions(style=req.style), client)
    return {
        "success": True,
        "notes": artifact_payload(gen.artifact),
        "style": req.style,
        "type": "notes",
        **_meta(gen),
    }


@router.post("/flashcards")
def flashcards(req: FlashcardsRequest, client: ModelClient | None = Depends(get_model_client)):
    gen = generate_with_meta(Variant.FLASHCARDS, req.content, FlashcardsOptions(count=req.count), client)
    cards = artifact_payload(gen.artifact)
    return {"success": True, "flashcards": cards, "count": len(cards), "type": "flashcards", **_meta(gen)}


@router.post("/quiz")
def quiz(req: QuizRequest, client: ModelClient | None = Depends(get_model_client)):
    opts = QuizOptions(question_count=req.questionCount, difficulty=req.difficulty)
    gen = generate_with_meta(Variant.QUIZ, req.content, opts, client)
    payload = artifact_payload(gen.artifact)
    return {
        "success": True,
        "quiz": payload,
        "questionCount": len(payload["questions"]),
        "difficulty": req.difficulty,
        "type": "quiz",
        **_meta(gen),
    }


@router.get("/features")
def features():
    return {
        "features": [
            {
                "id": "summarize",
                "name": "Summary",
                "description": "Generate a concise summary of the content",
            },
            {
                "id": "notes",
                "name": "Notes",
                "description": "Create structured notes from the content",
                "options": ["bullet", "outline", "detailed"],
            },
            {
                "id": "flashcards",
                "name": "Flashcards",
                "description": "Generate flashcards for study and memorization",
            },
            {
                "id": "quiz",
                "name": "Quiz",
                "description": "Create a quiz to test understanding",
                "options": ["easy", "medium", "hard"],
            },
        ]
    }
