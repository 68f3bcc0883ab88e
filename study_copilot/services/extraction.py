from __future__ import annotations

import logging
from pathlib import Path

from study_copilot.core.config import settings
from study_copilot.models.content import (
    ContentSource,
    ExtractionError,
    ExtractionErrorKind,
    NormalizedContent,
    SourceKind,
)
from study_copilot.services.documents import (
    extract_text_from_docx,
    extract_text_from_pdf,
    extract_text_from_txt,
    run_bounded,
)
from study_copilot.services.transcript import TranscriptFetcher, load_youtube_transcript
from study_copilot.services.youtube import extract_youtube_video_id

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = (".mp4", ".avi", ".mov", ".mkv", ".webm")
DOCUMENT_EXTENSIONS = (".pdf", ".docx", ".doc", ".txt")
SUPPORTED_EXTENSIONS = DOCUMENT_EXTENSIONS + VIDEO_EXTENSIONS

DOC_NOTICE = "Could not extract text from .doc file. Please convert to .docx or .pdf format."


def video_notice(filename: str) -> str:
    return (
        f"Video file uploaded: {filename}. Automatic video transcription is not yet implemented. "
        "Please provide a YouTube URL or upload a document instead."
    )


def _require_text(text: str | None) -> str:
    s = (text or "").strip()
    if not s:
        raise ExtractionError(ExtractionErrorKind.EMPTY_CONTENT)
    return s


def extract_youtube(url: str, language: str | None = None, fetcher: TranscriptFetcher | None = None) -> NormalizedContent:
    video_id = extract_youtube_video_id(url)
    if not video_id:
        raise ExtractionError(ExtractionErrorKind.INVALID_URL)

    text = load_youtube_transcript(video_id, language=language, fetcher=fetcher)
    return NormalizedContent(text=text, source_kind=SourceKind.YOUTUBE, source_id=video_id)


def _parse_document(parse, data: bytes, filename: str) -> str:
    try:
        return run_bounded(parse, data, settings.document_timeout_sec)
    except Exception as e:
        logger.warning("document_parse_failed filename=%s error=%s", filename, e)
        raise ExtractionError(
            ExtractionErrorKind.PARSE_FAILED,
            f"Failed to extract text from {filename}: {e}",
        ) from e


def extract_upload(data: bytes, filename: str) -> NormalizedContent:
    """
    Dispatch on the declared extension. The .doc and video branches are
    degraded successes: they return a fixed notice instead of failing.
    """
    ext = Path(filename or "").suffix.lower()
    logger.info("upload_extract filename=%s ext=%s bytes=%d", filename, ext or "-", len(data or b""))

    if ext not in SUPPORTED_EXTENSIONS:
        raise ExtractionError(ExtractionErrorKind.UNSUPPORTED_TYPE, f"Unsupported file type: {ext or filename}")

    if ext == ".pdf":
        text = _parse_document(extract_text_from_pdf, data, filename)
    elif ext == ".docx":
        text = _parse_document(extract_text_from_docx, data, filename)
    elif ext == ".doc":
        try:
            text = _parse_document(extract_text_from_docx, data, filename)
        except ExtractionError:
            text = DOC_NOTICE
    elif ext == ".txt":
        text = extract_text_from_txt(data)
    else:
        text = video_notice(filename)

    return NormalizedContent(text=_require_text(text), source_kind=SourceKind.UPLOAD, source_id=filename)


def extract_raw(text: str) -> NormalizedContent:
    _require_text(text)
    # pasted text is already normalized; keep it verbatim
    return NormalizedContent(text=text, source_kind=SourceKind.RAW)


def extract_content(source: ContentSource, fetcher: TranscriptFetcher | None = None) -> NormalizedContent:
    if source.kind == SourceKind.YOUTUBE:
        return extract_youtube(str(source.payload or ""), language=source.language, fetcher=fetcher)

    if source.kind == SourceKind.UPLOAD:
        data = source.payload
        if isinstance(data, str):
            data = data.encode("utf-8")
        return extract_upload(data or b"", source.filename or "")

    if source.kind == SourceKind.RAW:
        payload = source.payload
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        return extract_raw(payload)

    raise ValueError(f"Unknown source kind: {source.kind}")
