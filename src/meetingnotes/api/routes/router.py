"""API router aggregator."""

from fastapi import APIRouter

from meetingnotes.api.routes.summaries import router as summaries_router
from meetingnotes.api.routes.transcripts import router as transcripts_router

router = APIRouter(prefix="/api")
router.include_router(transcripts_router)
router.include_router(summaries_router)
