from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceKind(str, Enum):
    YOUTUBE = "youtube"
    UPLOAD = "upload"
    RAW = "raw"


@dataclass(frozen=True)
class ContentSource:
    """
    What the caller hands to extract_content():
    - youtube: payload is the video URL, language is an optional caption hint
    - upload:  payload is the file bytes, filename carries the declared extension
    - raw:     payload is the text itself
    """

    kind: SourceKind
    payload: str | bytes
    filename: str | None = None
    language: str | None = None


@dataclass(frozen=True)
class NormalizedContent:
    text: str
    source_kind: SourceKind
    source_id: str | None = None


class ExtractionErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    NO_TRANSCRIPT = "no_transcript"
    TRANSCRIPT_DISABLED = "transcript_disabled"
    VIDEO_UNAVAILABLE = "video_unavailable"
    UNSUPPORTED_TYPE = "unsupported_type"
    EMPTY_CONTENT = "empty_content"
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"


_DEFAULT_MESSAGES = {
    ExtractionErrorKind.INVALID_URL: "Invalid YouTube URL",
    ExtractionErrorKind.NO_TRANSCRIPT: "No transcript available for this video",
    ExtractionErrorKind.TRANSCRIPT_DISABLED: "Transcript is disabled for this video",
    ExtractionErrorKind.VIDEO_UNAVAILABLE: "Video is unavailable or private",
    ExtractionErrorKind.UNSUPPORTED_TYPE: "Unsupported file type",
    ExtractionErrorKind.EMPTY_CONTENT: "Content is empty",
    ExtractionErrorKind.FETCH_FAILED: "Failed to fetch YouTube transcript",
    ExtractionErrorKind.PARSE_FAILED: "Failed to extract text from document",
}


class ExtractionError(Exception):
    """The only failure that crosses the core boundary: no text could be obtained."""

    def __init__(self, kind: ExtractionErrorKind, message: str | None = None) -> None:
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)
