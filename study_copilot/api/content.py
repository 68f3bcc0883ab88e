from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from study_copilot.core.config import settings
from study_copilot.models.content import (
    ContentSource,
    ExtractionError,
    ExtractionErrorKind,
    SourceKind,
)
from study_copilot.services.extraction import extract_content

router = APIRouter(prefix="/api/content", tags=["content"])

_STATUS_BY_KIND = {
    ExtractionErrorKind.INVALID_URL: 400,
    ExtractionErrorKind.EMPTY_CONTENT: 400,
    ExtractionErrorKind.UNSUPPORTED_TYPE: 415,
    ExtractionErrorKind.NO_TRANSCRIPT: 404,
    ExtractionErrorKind.TRANSCRIPT_DISABLED: 404,
    ExtractionErrorKind.VIDEO_UNAVAILABLE: 404,
    ExtractionErrorKind.FETCH_FAILED: 502,
    ExtractionErrorKind.PARSE_FAILED: 502,
}


def _http_error(e: ExtractionError) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(e.kind, 500),
        detail={"error": e.kind.value, "message": e.message},
    )


class YoutubeContentRequest(BaseModel):
    url: str
    language: str | None = None


class YoutubeContentResponse(BaseModel):
    success: bool
    videoId: str
    url: str
    content: str
    type: str = "youtube"


class TextContentRequest(BaseModel):
    text: str


class UploadContentResponse(BaseModel):
    success: bool
    filename: str
    content: str
    type: str = "upload"


class TextContentResponse(BaseModel):
    success: bool
    content: str
    type: str = "raw"


@router.post("/youtube", response_model=YoutubeContentResponse)
def content_from_youtube(req: YoutubeContentRequest) -> YoutubeContentResponse:
    try:
        nc = extract_content(ContentSource(kind=SourceKind.YOUTUBE, payload=req.url, language=req.language))
    except ExtractionError as e:
        raise _http_error(e)

    return YoutubeContentResponse(success=True, videoId=nc.source_id or "", url=req.url, content=nc.text)


@router.post("/upload", response_model=UploadContentResponse)
async def content_from_upload(file: UploadFile = File(...)) -> UploadContentResponse:
    name = file.filename or "upload"
    try:
        if file.size is not None and file.size > settings.max_upload_bytes:
            raise HTTPException(status_code=413, detail={"error": "too_large", "message": "File exceeds upload limit"})

        data = await file.read()
        if len(data) > settings.max_upload_bytes:
            raise HTTPException(status_code=413, detail={"error": "too_large", "message": "File exceeds upload limit"})

        try:
            nc = await run_in_threadpool(
                extract_content,
                ContentSource(kind=SourceKind.UPLOAD, payload=data, filename=name),
            )
        except ExtractionError as e:
            raise _http_error(e)
    finally:
        # releases the spooled temp file on every path
        await file.close()

    return UploadContentResponse(success=True, filename=name, content=nc.text)


@router.post("/text", response_model=TextContentResponse)
def content_from_text(req: TextContentRequest) -> TextContentResponse:
    try:
        nc = extract_content(ContentSource(kind=SourceKind.RAW, payload=req.text))
    except ExtractionError as e:
        raise _http_error(e)

    return TextContentResponse(success=True, content=nc.text)
