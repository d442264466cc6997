"""Summary API endpoints."""

from fastapi import APIRouter

from meetingnotes.api.dependencies import SummaryServiceDep
from meetingnotes.api.routes.schemas import (
    MessageResponse,
    ShareRequest,
    SummarizeRequest,
    SummarizeResponse,
    SummaryDetail,
    SummaryDetailResponse,
    SummaryListItem,
    SummaryListResponse,
    UpdateSummaryRequest,
    UpdateSummaryResponse,
)

router = APIRouter(tags=["summaries"])


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    request: SummarizeRequest,
    service: SummaryServiceDep,
) -> SummarizeResponse:
    """Generate a summary for a transcript and store it."""
    record = await service.generate_summary(request.text, request.prompt)
    return SummarizeResponse(id=record.id, summary=record.summary, prompt=record.prompt)


@router.get("/summaries", response_model=SummaryListResponse)
async def list_summaries(service: SummaryServiceDep) -> SummaryListResponse:
    """List the most recent summaries, newest first."""
    records = await service.list_recent()
    return SummaryListResponse(
        summaries=[SummaryListItem.model_validate(r) for r in records]
    )


@router.get("/summaries/{summary_id}", response_model=SummaryDetailResponse)
async def get_summary(
    summary_id: str,
    service: SummaryServiceDep,
) -> SummaryDetailResponse:
    """Get a single summary by ID."""
    record = await service.get_summary(summary_id)
    return SummaryDetailResponse(summary=SummaryDetail.model_validate(record))


@router.put("/summaries/{summary_id}", response_model=UpdateSummaryResponse)
async def update_summary(
    summary_id: str,
    request: UpdateSummaryRequest,
    service: SummaryServiceDep,
) -> UpdateSummaryResponse:
    """Replace the text of a stored summary."""
    record = await service.update_summary(summary_id, request.summary)
    return UpdateSummaryResponse(summary=SummaryDetail.model_validate(record))


@router.delete("/summaries/{summary_id}", response_model=MessageResponse)
async def delete_summary(
    summary_id: str,
    service: SummaryServiceDep,
) -> MessageResponse:
    """Delete a summary permanently."""
    await service.delete_summary(summary_id)
    return MessageResponse(message="Summary deleted successfully")


@router.post("/share", response_model=MessageResponse)
async def share_summary(
    request: ShareRequest,
    service: SummaryServiceDep,
) -> MessageResponse:
    """Email a stored summary to a list of recipients."""
    result = await service.share_summary(
        request.summary_id,
        request.recipients,
        subject=request.subject,
        message=request.message,
    )
    return MessageResponse(message=result.message)
