"""Summary lifecycle operations behind the HTTP API."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from meetingnotes.config import get_settings
from meetingnotes.domain.summary import SummaryRecord
from meetingnotes.errors import DeliveryError, NotFoundError, StorageError, ValidationError
from meetingnotes.infrastructure.mailer import Mailer
from meetingnotes.repositories.summary_repo import SummaryRepository
from meetingnotes.services.summarizer import SummarizerService

logger = logging.getLogger(__name__)
settings = get_settings()

DEFAULT_SUBJECT = "Meeting Summary"
DEFAULT_MESSAGE = "Please find the meeting summary below:"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


@dataclass
class ShareResult:
    """Outcome of a successful share: every recipient was sent to."""

    summary_id: str
    recipients: list[str]

    @property
    def count(self) -> int:
        return len(self.recipients)

    @property
    def message(self) -> str:
        return f"Summary shared with {self.count} recipient(s)"


def compose_share_body(record: SummaryRecord, message: str | None = None) -> str:
    """Compose the plain-text email body for a shared summary."""
    lines = [
        message or DEFAULT_MESSAGE,
        "",
        "---",
        "",
        record.summary,
        "",
        "---",
        "",
        f"Generated on: {record.created_at.strftime(TIMESTAMP_FORMAT)}",
    ]
    if record.was_edited:
        lines.append(f"Last updated: {record.updated_at.strftime(TIMESTAMP_FORMAT)}")
    return "\n".join(lines) + "\n"


def normalize_recipients(recipients: object) -> list[str]:
    """Validate the recipients list and strip surrounding whitespace."""
    if not isinstance(recipients, list) or not recipients:
        raise ValidationError("Summary ID and recipients are required")

    cleaned = []
    for recipient in recipients:
        if not isinstance(recipient, str) or not recipient.strip():
            raise ValidationError("Recipients must be non-empty email addresses")
        if "\r" in recipient or "\n" in recipient:
            raise ValidationError("Recipients must not contain line breaks")
        cleaned.append(recipient.strip())
    return cleaned


class SummaryService:
    """Orchestrates summarization, the summary store and email sharing."""

    def __init__(
        self,
        repository: SummaryRepository,
        summarizer: SummarizerService | None = None,
        mailer: Mailer | None = None,
    ) -> None:
        self.repository = repository
        self.summarizer = summarizer
        self.mailer = mailer

    async def generate_summary(self, text: str | None, prompt: str | None = None) -> SummaryRecord:
        """Summarize a transcript and persist the result as a new record."""
        if not text or not text.strip():
            raise ValidationError("Text is required")

        instruction = prompt if prompt and prompt.strip() else settings.default_prompt
        summary = await self.summarizer.summarize(text, instruction)

        try:
            record = await self.repository.create(
                original_text=text, prompt=instruction, summary=summary
            )
            await self.repository.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save summary: {e}")
            raise StorageError("Failed to save summary", e) from e

        logger.info(f"Created summary {record.id}")
        return record

    async def list_recent(self) -> list[SummaryRecord]:
        """List the most recent summaries, newest first."""
        try:
            return await self.repository.list_recent(limit=settings.recent_summaries_limit)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch summaries: {e}")
            raise StorageError("Failed to fetch summaries", e) from e

    async def get_summary(self, summary_id: str) -> SummaryRecord:
        """Get one summary by ID."""
        try:
            record = await self.repository.get_by_id(summary_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch summary {summary_id}: {e}")
            raise StorageError("Failed to fetch summary", e) from e

        if record is None:
            raise NotFoundError("Summary not found")
        return record

    async def update_summary(self, summary_id: str, summary: str | None) -> SummaryRecord:
        """Replace the summary text of an existing record."""
        if not summary or not summary.strip():
            raise ValidationError("Summary content is required")

        try:
            record = await self.repository.update_summary(summary_id, summary)
            if record is not None:
                await self.repository.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update summary {summary_id}: {e}")
            raise StorageError("Failed to update summary", e) from e

        if record is None:
            raise NotFoundError("Summary not found")

        logger.info(f"Updated summary {summary_id}")
        return record

    async def delete_summary(self, summary_id: str) -> None:
        """Delete a summary permanently."""
        try:
            deleted = await self.repository.delete(summary_id)
            if deleted:
                await self.repository.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete summary {summary_id}: {e}")
            raise StorageError("Failed to delete summary", e) from e

        if not deleted:
            raise NotFoundError("Summary not found")

        logger.info(f"Deleted summary {summary_id}")

    async def share_summary(
        self,
        summary_id: str | None,
        recipients: object,
        subject: str | None = None,
        message: str | None = None,
    ) -> ShareResult:
        """Email a stored summary to every recipient, one at a time.

        Delivery is all-or-nothing from the caller's point of view: the first
        failed send aborts the remaining ones and raises DeliveryError.
        """
        if not summary_id:
            raise ValidationError("Summary ID and recipients are required")
        addresses = normalize_recipients(recipients)

        record = await self.get_summary(summary_id)
        body = compose_share_body(record, message)
        email_subject = subject or DEFAULT_SUBJECT

        delivered: list[str] = []
        for recipient in addresses:
            try:
                await self.mailer.send(recipient, email_subject, body)
            except DeliveryError as e:
                e.delivered = list(delivered)
                logger.error(
                    f"Sharing summary {summary_id} failed at {e.failed_recipient}; "
                    f"already sent to {len(e.delivered)} recipient(s): {e.delivered}"
                )
                raise
            delivered.append(recipient)

        logger.info(f"Shared summary {summary_id} with {len(delivered)} recipient(s)")
        return ShareResult(summary_id=summary_id, recipients=delivered)
