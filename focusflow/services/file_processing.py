"""Extract lesson text from uploaded files."""

import io
from typing import Optional

import docx
import structlog

from focusflow.exceptions import UnsupportedFileError, ValidationError

logger = structlog.get_logger()

PDF_DISABLED_MESSAGE = (
    "PDF processing temporarily disabled. Please use DOCX or TXT files."
)
UNSUPPORTED_MESSAGE = "Unsupported file type. Currently supports DOCX and TXT files only."


def _is_word(filename: str, content_type: str) -> bool:
    return "word" in content_type or filename.endswith(".docx")


def _is_text(filename: str, content_type: str) -> bool:
    return content_type.startswith("text/plain") or filename.endswith(".txt")


def extract_docx_text(data: bytes) -> str:
    document = docx.Document(io.BytesIO(data))
    return "\n".join(p.text for p in document.paragraphs if p.text.strip())


def extract_text(filename: Optional[str], content_type: Optional[str], data: bytes) -> str:
    """Return the plain text of an uploaded DOCX or TXT file."""
    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    if not data:
        raise ValidationError("No file provided", fields=["file"])

    if content_type == "application/pdf" or filename.endswith(".pdf"):
        raise UnsupportedFileError(PDF_DISABLED_MESSAGE, content_type=content_type)

    if _is_word(filename, content_type):
        try:
            text = extract_docx_text(data)
        except Exception as e:
            raise UnsupportedFileError(
                f"Could not read Word document: {e}", content_type=content_type
            ) from e
    elif _is_text(filename, content_type):
        text = data.decode("utf-8", errors="ignore")
    else:
        raise UnsupportedFileError(UNSUPPORTED_MESSAGE, content_type=content_type)

    logger.info("File processed", filename=filename, length=len(text))
    return text
