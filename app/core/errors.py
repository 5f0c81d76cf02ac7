"""
Structured errors raised by the selection analysis engine.

Only the analysis orchestrator raises these. The service facade catches
them, logs them, and degrades to a null result.
"""
from datetime import datetime, timezone
from typing import Any, Optional


ANALYSIS_ERROR = "ANALYSIS_ERROR"


class AnalysisError(Exception):
    """
    Raised when a selection analysis cannot be produced.

    Attributes:
        type: Error category (always "ANALYSIS_ERROR" for the orchestrator)
        message: Human-readable error message
        cause: Underlying exception or validation details, if any
        timestamp: When the error was raised (UTC)
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Any] = None,
        error_type: str = ANALYSIS_ERROR,
    ) -> None:
        self.type = error_type
        self.message = message
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the error to a JSON-safe dict."""
        result = {
            "type": self.type,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.cause is not None:
            result["cause"] = repr(self.cause) if isinstance(self.cause, Exception) else self.cause
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type}, message={self.message!r})"
