from typing import Any


class RevBotError(Exception):
    """Base exception for RevBot application."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DiffError(RevBotError):
    """Errors related to diff input."""

    pass


class DiffTooLargeError(DiffError):
    """Diff exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(
            f"Diff is {size_bytes} bytes, limit is {max_bytes}",
            {"size_bytes": size_bytes, "max_bytes": max_bytes},
        )


class AnalysisError(RevBotError):
    """Errors during the analysis process."""

    pass


class EmptyDiffError(AnalysisError):
    """The diff to analyze is empty or missing."""

    def __init__(self, message: str = "Failed to fetch PR diff or PR is empty") -> None:
        super().__init__(message)


class ConfigurationError(RevBotError):
    """Invalid or missing configuration."""

    pass
