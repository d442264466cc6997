"""Transcript input normalization for the upload endpoint."""

from dataclasses import dataclass

from meetingnotes.config import get_settings
from meetingnotes.errors import ValidationError

settings = get_settings()

TEXT_CONTENT_TYPE = "text/plain"
TEXT_EXTENSION = ".txt"


@dataclass
class TranscriptUpload:
    """An uploaded transcript file, read into memory."""

    filename: str | None
    content_type: str | None
    data: bytes


def too_large_message(limit: int) -> str:
    return f"File size too large. Maximum {limit // (1024 * 1024)}MB allowed."


def is_text_file(filename: str | None, content_type: str | None) -> bool:
    """Accept files declared as plain text or named *.txt."""
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type == TEXT_CONTENT_TYPE:
        return True
    return bool(filename) and filename.lower().endswith(TEXT_EXTENSION)


def resolve_transcript(
    upload: TranscriptUpload | None,
    raw_text: str | None,
    max_bytes: int | None = None,
) -> str:
    """Resolve the transcript text from an uploaded file or inline text.

    The file wins when both are supplied. File bytes are decoded as UTF-8 with
    invalid sequences replaced.

    Raises:
        ValidationError: nothing supplied, wrong file type, file too large,
            or the resolved text is empty.
    """
    limit = max_bytes or settings.max_upload_bytes
    too_large = too_large_message(limit)

    if upload is None and not raw_text:
        raise ValidationError("No file or text provided")

    if upload is not None:
        if not is_text_file(upload.filename, upload.content_type):
            raise ValidationError("Only .txt files are allowed")
        if len(upload.data) > limit:
            raise ValidationError(too_large)
        text = upload.data.decode("utf-8", errors="replace")
    else:
        text = raw_text or ""
        if len(text.encode("utf-8")) > limit:
            raise ValidationError(too_large)

    if not text.strip():
        raise ValidationError("Transcript text is empty")

    return text
