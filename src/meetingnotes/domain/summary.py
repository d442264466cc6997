"""Summary record domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class SummaryRecord:
    """A transcript together with the prompt and the summary produced for it."""

    id: str | None
    original_text: str
    prompt: str
    summary: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def was_edited(self) -> bool:
        """True once the summary text has been changed after creation."""
        if self.created_at is None or self.updated_at is None:
            return False
        return self.updated_at > self.created_at
