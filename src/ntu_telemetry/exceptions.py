"""Custom exceptions for NTU Telemetry.

Each exception includes a helpful message and an optional hint for
operators configuring the service.
"""

from typing import Optional


class ConfigurationError(ValueError):
    """Raised when thresholds, windows or settings are invalid.

    Attributes:
        message: Human-readable error message.
        hint: Optional troubleshooting hint.
        exit_code: Suggested exit code for CLI applications.
    """

    exit_code: int = 1

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional hint."""
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message
