"""Transcript upload endpoint."""

import json
import logging

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from meetingnotes.api.routes.schemas import UploadResponse
from meetingnotes.config import get_settings
from meetingnotes.errors import ValidationError
from meetingnotes.services.transcripts import (
    TranscriptUpload,
    is_text_file,
    resolve_transcript,
    too_large_message,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(tags=["transcripts"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


async def _read_form(request: Request) -> tuple[TranscriptUpload | None, str | None]:
    """Read the `transcript` file field and `text` field from a form body."""
    try:
        form = await request.form(max_part_size=settings.max_upload_bytes)
    except StarletteHTTPException as e:
        # Oversized inline fields share the file ceiling message
        if e.status_code == 400 and "maximum size" in str(e.detail):
            raise ValidationError(too_large_message(settings.max_upload_bytes)) from e
        raise
    file = form.get("transcript")
    text = form.get("text")

    upload = None
    if isinstance(file, UploadFile):
        # Reject other file types before reading the body
        if not is_text_file(file.filename, file.content_type):
            raise ValidationError("Only .txt files are allowed")
        data = await file.read(settings.max_upload_bytes + 1)
        upload = TranscriptUpload(
            filename=file.filename, content_type=file.content_type, data=data
        )

    return upload, text if isinstance(text, str) else None


async def _read_json(request: Request) -> str | None:
    """Read the `text` field from a JSON body."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError("Invalid JSON body") from e

    if isinstance(body, dict) and isinstance(body.get("text"), str):
        return body["text"]
    return None


@router.post("/upload", response_model=UploadResponse)
async def upload_transcript(request: Request) -> UploadResponse:
    """Accept a transcript as a .txt file upload or inline text and echo it back."""
    content_type = request.headers.get("content-type", "").lower()

    upload, raw_text = None, None
    if content_type.startswith(FORM_CONTENT_TYPES):
        upload, raw_text = await _read_form(request)
    elif content_type.startswith("application/json"):
        raw_text = await _read_json(request)

    text = resolve_transcript(upload, raw_text)
    logger.info(f"Accepted transcript ({len(text)} chars)")
    return UploadResponse(text=text, length=len(text))
