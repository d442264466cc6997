"""Pydantic schemas for API request/response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UploadResponse(CamelModel):
    """Response schema for transcript upload."""

    success: bool = True
    text: str
    length: int


class SummarizeRequest(CamelModel):
    """Request schema for summary generation."""

    text: str | None = None
    prompt: str | None = None


class SummarizeResponse(CamelModel):
    """Response schema for summary generation."""

    success: bool = True
    id: str
    summary: str
    prompt: str


class SummaryListItem(CamelModel):
    """A summary in the recent list, without its original text."""

    id: str
    prompt: str
    summary: str
    created_at: datetime
    updated_at: datetime


class SummaryDetail(SummaryListItem):
    """A complete summary record."""

    original_text: str


class SummaryListResponse(CamelModel):
    """Response schema for the recent summaries list."""

    summaries: list[SummaryListItem]


class SummaryDetailResponse(CamelModel):
    """Response schema for a single summary."""

    summary: SummaryDetail


class UpdateSummaryRequest(CamelModel):
    """Request schema for editing a summary."""

    summary: str | None = None


class UpdateSummaryResponse(CamelModel):
    """Response schema for an edited summary."""

    success: bool = True
    summary: SummaryDetail


class MessageResponse(CamelModel):
    """Generic success acknowledgement."""

    success: bool = True
    message: str


class ShareRequest(CamelModel):
    """Request schema for emailing a summary."""

    summary_id: str | None = None
    # Validated by the service so wrong shapes map to the share error message
    recipients: Any = None
    subject: str | None = None
    message: str | None = None


class HealthResponse(CamelModel):
    """Liveness probe response."""

    status: str
    timestamp: datetime
