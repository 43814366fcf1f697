class RefreshError(Exception):
    """Base exception for metrics refresh errors."""

    def __init__(self, message: str, podcast_id: int | None = None):
        self.podcast_id = podcast_id
        super().__init__(message)


class JobQueueError(RefreshError):
    """Raised when the job store fails while a job is being submitted."""


class RunAbortedError(RefreshError):
    """Raised when a background run cannot start (e.g. tracked podcasts unreadable)."""


class SettingsValidationError(RefreshError):
    """Raised when persisted settings hold invalid values."""

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        self.errors = errors or {}
        super().__init__(message)
