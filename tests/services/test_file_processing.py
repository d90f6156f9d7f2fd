import io

import docx
import pytest

from focusflow.exceptions import UnsupportedFileError, ValidationError
from focusflow.services.file_processing import extract_text

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def make_docx(*paragraphs: str) -> bytes:
    document = docx.Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_docx_paragraphs_are_joined():
    data = make_docx("Fractions lesson", "", "Warm-up: pizza slices")
    assert extract_text("lesson.docx", DOCX_TYPE, data) == (
        "Fractions lesson\nWarm-up: pizza slices"
    )


def test_docx_detected_by_extension():
    data = make_docx("Division")
    assert extract_text("Lesson.DOCX", "application/octet-stream", data) == "Division"


def test_plain_text():
    assert extract_text("notes.txt", "text/plain", "Water cycle".encode()) == "Water cycle"


def test_pdf_is_rejected():
    with pytest.raises(UnsupportedFileError) as exc_info:
        extract_text("lesson.pdf", "application/pdf", b"%PDF-1.4")
    assert exc_info.value.status_code == 400


def test_unknown_type_is_rejected():
    with pytest.raises(UnsupportedFileError):
        extract_text("image.png", "image/png", b"\x89PNG")


def test_corrupt_docx_is_rejected():
    with pytest.raises(UnsupportedFileError):
        extract_text("broken.docx", DOCX_TYPE, b"not a zip file")


def test_empty_upload():
    with pytest.raises(ValidationError):
        extract_text("empty.txt", "text/plain", b"")
