"""
Structured errors with severity levels and suggestions.
"""
from enum import Enum
from typing import Dict, List, Optional


class ErrorCode(str, Enum):
    """Error codes for different failure scenarios."""
    PARSE_ERROR = "PARSE_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    GRAPH_ERROR = "GRAPH_ERROR"
    STORE_ERROR = "STORE_ERROR"


class ErrorSeverity(str, Enum):
    """Error severity levels."""
    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"


class PithError(Exception):
    """Error carrying a code, a severity and a suggestion (the code's default unless given)."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message
        self.severity = ErrorSeverity(severity)
        self.suggestion = suggestion if suggestion is not None else get_suggestion(self.code)


_SUGGESTIONS: Dict[ErrorCode, str] = {
    ErrorCode.PARSE_ERROR: "Check for syntax errors in the file. Ensure the fact records are valid JSON.",
    ErrorCode.CONFIG_ERROR: "Check your pith.config.json file and ensure all fields have valid values.",
    ErrorCode.FILE_NOT_FOUND: "Verify the path exists and you have permission to access it.",
    ErrorCode.GRAPH_ERROR: "Re-run extraction; the fact set contains conflicting entries.",
    ErrorCode.STORE_ERROR: "Check the data directory; the store file may be corrupt or unwritable.",
}


def get_suggestion(code: ErrorCode) -> str:
    """Get a helpful suggestion for a given error code."""
    return _SUGGESTIONS.get(code, "Please check the error message for details.")


def format_error(error: Exception) -> str:
    """Format an error for user-friendly display."""
    if not isinstance(error, PithError):
        return f"Error: {error}"

    label = {
        ErrorSeverity.FATAL: "Fatal",
        ErrorSeverity.WARNING: "Warning",
    }.get(error.severity, "Error")

    formatted = f"{label}: {error.message}\n  Type: {error.code.value}"
    if error.suggestion:
        formatted += f"\n  Suggestion: {error.suggestion}"
    return formatted


def group_errors_by_severity(errors: List[Exception]) -> Dict[str, List[Exception]]:
    """Group errors by severity; plain exceptions count as 'error'."""
    grouped: Dict[str, List[Exception]] = {severity.value: [] for severity in ErrorSeverity}

    for error in errors:
        if isinstance(error, PithError):
            grouped[error.severity.value].append(error)
        else:
            grouped[ErrorSeverity.ERROR.value].append(error)

    return grouped
