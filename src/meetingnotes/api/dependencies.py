"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from meetingnotes.infrastructure.database import get_session
from meetingnotes.infrastructure.mailer import Mailer
from meetingnotes.repositories.summary_repo import SummaryRepository
from meetingnotes.services.summaries import SummaryService
from meetingnotes.services.summarizer import SummarizerService

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_summarizer(request: Request) -> SummarizerService:
    """Provide the generation client created at startup."""
    return request.app.state.summarizer


def get_mailer(request: Request) -> Mailer:
    """Provide the mail relay client created at startup."""
    return request.app.state.mailer


async def get_summary_repository(
    session: SessionDep,
) -> AsyncGenerator[SummaryRepository, None]:
    """Provide SummaryRepository instance."""
    yield SummaryRepository(session)


SummaryRepoDep = Annotated[SummaryRepository, Depends(get_summary_repository)]
SummarizerDep = Annotated[SummarizerService, Depends(get_summarizer)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]


def get_summary_service(
    repository: SummaryRepoDep,
    summarizer: SummarizerDep,
    mailer: MailerDep,
) -> SummaryService:
    """Provide SummaryService wired to the per-request repository."""
    return SummaryService(repository, summarizer=summarizer, mailer=mailer)


SummaryServiceDep = Annotated[SummaryService, Depends(get_summary_service)]
