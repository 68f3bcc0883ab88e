from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable

import requests
from youtube_transcript_api import (
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)
from youtube_transcript_api.proxies import GenericProxyConfig

from study_copilot.core.config import settings
from study_copilot.models.content import ExtractionError, ExtractionErrorKind

logger = logging.getLogger(__name__)

# fetch_transcript(video_id, language) -> [{"text": ...}, ...]
TranscriptFetcher = Callable[[str, "str | None"], Iterable[dict[str, Any]]]

_BRACKETED_RE = re.compile(r"\[.*?\]")
_SPACE_RE = re.compile(r"\s+")


class _TimeoutSession(requests.Session):
    """requests session that applies a default timeout to every call."""

    def __init__(self, timeout_s: float) -> None:
        super().__init__()
        self.timeout_s = timeout_s

    def request(self, method, url, **kwargs):
        kwargs.setdefault("timeout", self.timeout_s)
        return super().request(method, url, **kwargs)


def _proxy_config(proxy_url: str | None) -> GenericProxyConfig | None:
    if not proxy_url:
        return None
    return GenericProxyConfig(http_url=proxy_url, https_url=proxy_url)


def fetch_youtube_transcript(video_id: str, language: str | None = None) -> list[dict[str, Any]]:
    """
    Default transcript collaborator backed by youtube-transcript-api.
    Returns raw segments: [{text, start, duration}, ...]
    """
    api = YouTubeTranscriptApi(
        proxy_config=_proxy_config(settings.youtube_proxy_url),
        http_client=_TimeoutSession(settings.youtube_timeout_sec),
    )
    fetched = api.fetch(video_id, languages=[language or settings.youtube_default_language])
    return fetched.to_raw_data()


def clean_transcript_text(segments: Iterable[dict[str, Any]]) -> str:
    """
    Join caption fragments with single spaces, drop bracketed markers like
    "[Music]" or "[00:12]", collapse whitespace.
    """
    parts = [(seg.get("text") or "") for seg in segments or []]
    text = " ".join(parts)
    text = _BRACKETED_RE.sub("", text)
    return _SPACE_RE.sub(" ", text).strip()


def _map_fetch_error(err: Exception) -> ExtractionError:
    if isinstance(err, TranscriptsDisabled):
        return ExtractionError(ExtractionErrorKind.TRANSCRIPT_DISABLED)
    if isinstance(err, NoTranscriptFound):
        return ExtractionError(ExtractionErrorKind.NO_TRANSCRIPT)
    if isinstance(err, VideoUnavailable):
        return ExtractionError(ExtractionErrorKind.VIDEO_UNAVAILABLE)

    # Fetchers other than youtube-transcript-api only give us a message.
    msg = str(err)
    low = msg.lower()
    if "disabled" in low:
        return ExtractionError(ExtractionErrorKind.TRANSCRIPT_DISABLED)
    if "no transcript" in low:
        return ExtractionError(ExtractionErrorKind.NO_TRANSCRIPT)
    if "unavailable" in low or "private" in low:
        return ExtractionError(ExtractionErrorKind.VIDEO_UNAVAILABLE)
    return ExtractionError(
        ExtractionErrorKind.FETCH_FAILED,
        f"Failed to fetch YouTube transcript: {msg or type(err).__name__}",
    )


def load_youtube_transcript(
    video_id: str,
    language: str | None = None,
    fetcher: TranscriptFetcher | None = None,
) -> str:
    fetch = fetcher or fetch_youtube_transcript
    logger.info("transcript_fetch video_id=%s language=%s", video_id, language or "-")

    try:
        segments = fetch(video_id, language)
    except Exception as e:
        logger.warning("transcript_fetch_failed video_id=%s error=%s", video_id, e)
        raise _map_fetch_error(e) from e

    segments = list(segments or [])
    if not segments:
        raise ExtractionError(ExtractionErrorKind.NO_TRANSCRIPT)

    text = clean_transcript_text(segments)
    if not text:
        raise ExtractionError(ExtractionErrorKind.NO_TRANSCRIPT)

    logger.info("transcript_extracted video_id=%s chars=%d", video_id, len(text))
    return text
