"""Exception hierarchy mapped to HTTP responses at the API boundary."""


class MeetingNotesError(Exception):
    """Base exception for application errors."""

    status_code = 500

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MeetingNotesError):
    """Raised when required input is missing or empty."""

    status_code = 400


class NotFoundError(MeetingNotesError):
    """Raised when no summary matches the requested identifier."""

    status_code = 404


class StorageError(MeetingNotesError):
    """Raised when a summary store operation fails."""

    pass


class UpstreamError(MeetingNotesError):
    """Raised when the generation service call fails."""

    pass


class RateLimitError(UpstreamError):
    """Generation service rejected the call for exceeding its rate limit."""

    status_code = 429


class QuotaExceededError(UpstreamError):
    """Generation service account has run out of quota."""

    status_code = 429


class UpstreamAuthError(UpstreamError):
    """Generation service rejected the configured credential."""

    status_code = 401


class DeliveryError(MeetingNotesError):
    """Raised when a shared summary could not be sent to every recipient.

    Delivery stops at the first failure; ``delivered`` lists the recipients
    that were sent to before it.
    """

    def __init__(
        self,
        message: str,
        failed_recipient: str,
        delivered: list[str] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.failed_recipient = failed_recipient
        self.delivered = delivered or []
