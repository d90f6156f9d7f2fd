from typing import Optional

from fastapi import APIRouter, File, UploadFile

from focusflow.exceptions import ValidationError
from focusflow.schemas.lesson import ProcessFileResponse
from focusflow.services.file_processing import extract_text

router = APIRouter()


@router.post(
    "/process-file",
    response_model=ProcessFileResponse,
    description="Extract plain text from an uploaded DOCX or TXT lesson plan.",
)
async def process_file(
    file: Optional[UploadFile] = File(None),
) -> ProcessFileResponse:
    if file is None:
        raise ValidationError("No file provided", fields=["file"])

    data = await file.read()
    text = extract_text(file.filename, file.content_type, data)
    return ProcessFileResponse(text=text, length=len(text))
