"""
Document Extraction Engine
- PDF via PyMuPDF (fitz)
- DOCX via python-docx
Legacy .doc and anything else is rejected up front.
"""

import io
import logging
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF
from docx import Document

from services.errors import EmptyDocumentError, ExtractionFailure, UnsupportedFormatError
from utils.text_utils import clean_text

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"

EXTENSION_MIME = {
    ".pdf": PDF_MIME,
    ".docx": DOCX_MIME,
    ".doc": DOC_MIME,
}

GENERIC_MIMES = {"", "application/octet-stream", "binary/octet-stream"}


def resolve_mime_type(filename: Optional[str], content_type: Optional[str]) -> str:
    """
    Uses the declared content type unless it is missing or generic,
    in which case the file extension decides.
    """
    declared = (content_type or "").split(";")[0].strip().lower()
    if declared not in GENERIC_MIMES:
        return declared
    ext = Path(filename or "").suffix.lower()
    return EXTENSION_MIME.get(ext, declared or "application/octet-stream")


def get_full_pdf_text(file_bytes: bytes) -> str:
    with fitz.open(stream=file_bytes, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)


def get_full_docx_text(file_bytes: bytes) -> str:
    """Paragraph text followed by table cell text."""
    doc = Document(io.BytesIO(file_bytes))
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)


def extract_text(file_bytes: bytes, mime_type: str) -> str:
    """
    Returns the cleaned text content of an uploaded resume.

    Raises:
        UnsupportedFormatError: legacy .doc or a non PDF/DOCX upload
        ExtractionFailure: the file could not be parsed
        EmptyDocumentError: no text could be extracted
    """
    if mime_type == DOC_MIME:
        raise UnsupportedFormatError("Old .doc format is not supported. Please save as .docx or PDF.")
    if mime_type == PDF_MIME:
        reader, label = get_full_pdf_text, "PDF"
    elif mime_type == DOCX_MIME:
        reader, label = get_full_docx_text, "DOCX"
    else:
        raise UnsupportedFormatError("Invalid file format. Upload PDF or DOCX.")

    if not file_bytes:
        raise EmptyDocumentError(f"Uploaded {label} file is empty.")

    try:
        text = reader(file_bytes)
    except Exception as e:
        logger.warning("%s parse error: %s", label, e)
        raise ExtractionFailure(f"Corrupt or invalid {label} file.") from e

    text = clean_text(text)
    if not text:
        raise EmptyDocumentError(
            f"{label} text could not be extracted. Try converting to a text-based {label}."
        )
    return text
