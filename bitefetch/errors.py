# errors.py
"""
Custom exception classes with actionable error messages for bitefetch

All exceptions include:
- Clear error description
- Optional suggestion
- Relevant context (paths, URLs, status codes)
"""
from pathlib import Path
from typing import Optional, Dict, Any


class BitefetchError(Exception):
    """Base exception for all bitefetch errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"❌ {self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("💡 Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(BitefetchError):
    """Configuration is missing or invalid"""
    pass


class FetchError(BitefetchError):
    """Error communicating with the exercises API"""
    pass


class RecordDecodeError(BitefetchError):
    """API response could not be turned into exercise records"""
    pass


class ScaffoldError(BitefetchError):
    """Error writing the exercises workspace to disk"""
    pass


# Specific error factory functions

def http_status_error(url: str, status_code: int, reason: str) -> FetchError:
    """Create error for a non-success HTTP response"""
    suggestion = "Check that the API is reachable and try again later"
    if status_code in (401, 403):
        suggestion = (
            "Your API key was rejected. Check the key:\n"
            "  export PYBITES_API_KEY='your_key'\n\n"
            "Or unset it to download the free exercises only:\n"
            "  unset PYBITES_API_KEY"
        )
    return FetchError(
        message=f"Exercises API returned {status_code} {reason}".rstrip(),
        suggestion=suggestion,
        context={
            "url": url,
            "status_code": status_code,
        }
    )


def missing_fields_error(
    index: int,
    missing_fields: list[str],
) -> RecordDecodeError:
    """Create error for an exercise record lacking required fields"""
    return RecordDecodeError(
        message=f"Exercise record #{index} is missing required fields",
        suggestion="The API response format may have changed; upgrade bitefetch",
        context={
            "missing_fields": missing_fields,
        }
    )


def write_failed_error(path: Path, cause: Exception) -> ScaffoldError:
    """Create error when a file or directory cannot be written"""
    return ScaffoldError(
        message=f"Could not write {path}",
        suggestion=(
            "Check permissions and free disk space for the exercises folder.\n"
            "  Files written before this error were left in place."
        ),
        context={
            "path": str(path),
        },
        cause=cause
    )
