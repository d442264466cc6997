"""Summary repository for database operations."""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meetingnotes.domain.summary import SummaryRecord
from meetingnotes.infrastructure.models import SummaryModel


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps returned by backends without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(model: SummaryModel) -> SummaryRecord:
    return SummaryRecord(
        id=model.id,
        original_text=model.original_text,
        prompt=model.prompt,
        summary=model.summary,
        created_at=_as_utc(model.created_at),
        updated_at=_as_utc(model.updated_at),
    )


class SummaryRepository:
    """Repository for SummaryRecord CRUD operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, original_text: str, prompt: str, summary: str) -> SummaryRecord:
        """Insert a new summary record.

        Both timestamps come from a single clock reading so a fresh record
        always has created_at == updated_at.
        """
        now = datetime.now(UTC)
        model = SummaryModel(
            original_text=original_text,
            prompt=prompt,
            summary=summary,
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        await self.session.flush()
        return _to_domain(model)

    async def get_by_id(self, summary_id: str) -> SummaryRecord | None:
        """Get a summary record by its ID."""
        model = await self.session.get(SummaryModel, summary_id)
        if model is None:
            return None
        return _to_domain(model)

    async def list_recent(self, limit: int = 50) -> list[SummaryRecord]:
        """List the newest summary records, ordered by creation time descending."""
        stmt = (
            select(SummaryModel)
            .order_by(SummaryModel.created_at.desc(), SummaryModel.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [_to_domain(m) for m in result.scalars().all()]

    async def update_summary(self, summary_id: str, summary: str) -> SummaryRecord | None:
        """Replace the summary text and refresh updated_at.

        Returns None when no record matches. Concurrent edits are last-writer-wins.
        """
        model = await self.session.get(SummaryModel, summary_id)
        if model is None:
            return None

        model.summary = summary
        model.updated_at = max(datetime.now(UTC), _as_utc(model.created_at))
        await self.session.flush()
        return _to_domain(model)

    async def delete(self, summary_id: str) -> bool:
        """Delete a summary record permanently. Returns False if it did not exist."""
        model = await self.session.get(SummaryModel, summary_id)
        if model is None:
            return False

        await self.session.delete(model)
        await self.session.flush()
        return True

    async def commit(self) -> None:
        """Commit pending writes."""
        await self.session.commit()
