from __future__ import annotations

import io
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, List

from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)


class DocumentTimeout(Exception):
    pass


def _normalize_text(text: str) -> str:
    text = text.replace("\u00a0", " ")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    lines = [ln.strip() for ln in text.split("\n")]
    lines = [ln for ln in lines if ln]
    return "\n".join(lines).strip()


def extract_text_from_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages: List[str] = []
    for p in reader.pages:
        pages.append((p.extract_text() or "").strip())
    return _normalize_text("\n\n".join(pages))


def extract_text_from_docx(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    paragraphs = [p.text for p in doc.paragraphs]
    return _normalize_text("\n".join(paragraphs))


def extract_text_from_txt(data: bytes) -> str:
    # utf-8-sig drops a leading BOM; undecodable bytes become U+FFFD
    return data.decode("utf-8-sig", errors="replace")


def run_bounded(parse: Callable[[bytes], str], data: bytes, timeout_s: float) -> str:
    """
    Run a document parser in a single-use worker and wait at most `timeout_s`.
    On timeout the parse result is abandoned and DocumentTimeout is raised.
    """
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="doc-parse")
    try:
        future = pool.submit(parse, data)
        try:
            return future.result(timeout=timeout_s)
        except FutureTimeout as e:
            future.cancel()
            logger.warning("document_parse_timeout parser=%s timeout_s=%s", parse.__name__, timeout_s)
            raise DocumentTimeout(f"{parse.__name__} timed out after {timeout_s}s") from e
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
