import io
import time

import pytest
from docx import Document

from study_copilot.models.content import (
    ContentSource,
    ExtractionError,
    ExtractionErrorKind,
    SourceKind,
)
from study_copilot.services import extraction
from study_copilot.services.documents import DocumentTimeout, run_bounded
from study_copilot.services.extraction import DOC_NOTICE, extract_content


def _upload(data: bytes, filename: str):
    return extract_content(ContentSource(kind=SourceKind.UPLOAD, payload=data, filename=filename))


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


# -----------------------
# YouTube
# -----------------------
def test_youtube_source_uses_fetcher():
    def fake_fetch(video_id: str, language=None):
        assert video_id == "dQw4w9WgXcQ"
        return [{"text": "The sky is blue."}, {"text": "[Music] Water is wet."}]

    nc = extract_content(
        ContentSource(kind=SourceKind.YOUTUBE, payload="https://youtube.com/watch?v=dQw4w9WgXcQ"),
        fetcher=fake_fetch,
    )
    assert nc.text == "The sky is blue. Water is wet."
    assert nc.source_kind == SourceKind.YOUTUBE
    assert nc.source_id == "dQw4w9WgXcQ"


def test_youtube_invalid_url():
    def never_called(video_id, language=None):
        raise AssertionError("fetcher should not run")

    with pytest.raises(ExtractionError) as ei:
        extract_content(
            ContentSource(kind=SourceKind.YOUTUBE, payload="https://example.com/video"),
            fetcher=never_called,
        )
    assert ei.value.kind == ExtractionErrorKind.INVALID_URL


# -----------------------
# Uploads
# -----------------------
def test_txt_upload_is_decoded():
    nc = _upload("Ünïcode notes. Second line.".encode("utf-8"), "notes.txt")
    assert nc.text == "Ünïcode notes. Second line."
    assert nc.source_kind == SourceKind.UPLOAD
    assert nc.source_id == "notes.txt"


def test_blank_txt_upload_is_empty_content():
    with pytest.raises(ExtractionError) as ei:
        _upload(b"   \n ", "blank.txt")
    assert ei.value.kind == ExtractionErrorKind.EMPTY_CONTENT


def test_docx_upload():
    nc = _upload(_docx_bytes("First paragraph.", "Second paragraph."), "lecture.DOCX")
    assert nc.text == "First paragraph.\nSecond paragraph."


def test_doc_upload_failure_returns_notice():
    nc = _upload(b"\xd0\xcf\x11\xe0 legacy word binary", "old.doc")
    assert nc.text == DOC_NOTICE


def test_broken_docx_is_parse_failed():
    with pytest.raises(ExtractionError) as ei:
        _upload(b"not a zip archive", "broken.docx")
    assert ei.value.kind == ExtractionErrorKind.PARSE_FAILED


def test_pdf_upload_uses_pdf_parser(monkeypatch):
    def fake_pdf(data: bytes) -> str:
        assert data == b"%PDF-fake"
        return "Page one text.\n\nPage two text."

    monkeypatch.setattr(extraction, "extract_text_from_pdf", fake_pdf)
    nc = _upload(b"%PDF-fake", "slides.pdf")
    assert nc.text == "Page one text.\n\nPage two text."


def test_broken_pdf_is_parse_failed():
    with pytest.raises(ExtractionError) as ei:
        _upload(b"definitely not a pdf", "broken.pdf")
    assert ei.value.kind == ExtractionErrorKind.PARSE_FAILED


@pytest.mark.parametrize("ext", [".mp4", ".avi", ".mov", ".mkv", ".webm"])
def test_video_upload_returns_notice(ext):
    nc = _upload(b"\x00\x00\x00\x18ftypmp42", f"lecture{ext}")
    assert nc.text.startswith(f"Video file uploaded: lecture{ext}.")
    assert "not yet implemented" in nc.text


def test_unsupported_upload():
    with pytest.raises(ExtractionError) as ei:
        _upload(b"PK..", "deck.pptx")
    assert ei.value.kind == ExtractionErrorKind.UNSUPPORTED_TYPE


def test_parser_timeout_is_bounded():
    def slow_parse(data: bytes) -> str:
        time.sleep(1.0)
        return "late"

    started = time.monotonic()
    with pytest.raises(DocumentTimeout):
        run_bounded(slow_parse, b"", timeout_s=0.05)
    assert time.monotonic() - started < 0.9


# -----------------------
# Raw text
# -----------------------
def test_raw_text_is_kept_verbatim():
    nc = extract_content(ContentSource(kind=SourceKind.RAW, payload="  The sky is blue.  "))
    assert nc.text == "  The sky is blue.  "
    assert nc.source_kind == SourceKind.RAW
    assert nc.source_id is None


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_raw_text_is_empty_content(text):
    with pytest.raises(ExtractionError) as ei:
        extract_content(ContentSource(kind=SourceKind.RAW, payload=text))
    assert ei.value.kind == ExtractionErrorKind.EMPTY_CONTENT
