"""
Error kinds surfaced to the UI.

ValidationError is raised before any network call; ServiceError covers every
failure after that point and always carries the same user-facing message.
"""

USER_FAILURE_MESSAGE = "Failed to analyze texts. Please try again."
MIN_SAMPLES_MESSAGE = "Please provide at least 2 text samples to compare"


class ValidationError(ValueError):
    """Input rejected client-side; no embedding call was made."""


class ServiceError(RuntimeError):
    """Embedding call or scoring failed. No partial results exist."""

    def __init__(self, message: str = USER_FAILURE_MESSAGE):
        super().__init__(message)


class AnalysisCancelled(ServiceError):
    """The in-flight analysis was abandoned by the caller."""

    def __init__(self, message: str = "Analysis cancelled."):
        super().__init__(message)
