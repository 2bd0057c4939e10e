"""
Exception hierarchy for mvnsettings.

Exceptions carry a category, a severity, structured details and troubleshooting
hints so the CLI can render them and pick an exit code.
"""

import time
from enum import Enum
from typing import TYPE_CHECKING, Any

from .logging import get_logger

if TYPE_CHECKING:
    from ..core.models import SettingsProblem

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Categories for error classification."""

    USER_ERROR = "user_error"
    CONFIGURATION_ERROR = "configuration_error"
    DATA_ERROR = "data_error"
    SECURITY_ERROR = "security_error"
    SYSTEM_ERROR = "system_error"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MavenSettingsError(Exception):
    """
    Base exception for all mvnsettings errors.

    Provides error context, categorization, and troubleshooting guidance.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        category: ErrorCategory = ErrorCategory.SYSTEM_ERROR,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        troubleshooting_hints: list[str] | None = None,
        **context: Any,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.category = category
        self.severity = severity
        self.user_message = user_message or message
        self.troubleshooting_hints = troubleshooting_hints or []
        self.context = context
        self.timestamp = time.time()

        self._log_error()

    def _log_error(self) -> None:
        """Log error creation with full context."""
        logger.debug(
            f"Exception created: {self.__class__.__name__}",
            error=self.message,
            category=self.category.value,
            severity=self.severity.value,
            **self.details,
            **self.context,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp,
            "details": self.details,
            "troubleshooting_hints": self.troubleshooting_hints,
            "context": self.context,
        }


class ConfigurationError(MavenSettingsError):
    """Raised when the application configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        actual_value: str | None = None,
        **kwargs,
    ):
        hints = [
            "Check your configuration file (.env) for missing or incorrect values",
            "Verify MVNSETTINGS_* environment variables are properly set",
            "Run 'mvnsettings paths' to see which files are being used",
        ]

        if config_key:
            hints.append(f"Ensure '{config_key}' is properly configured")
            kwargs.setdefault("details", {})["config_key"] = config_key

        if actual_value:
            kwargs.setdefault("details", {})["actual_value"] = actual_value

        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION_ERROR,
            troubleshooting_hints=hints,
            **kwargs,
        )


class SettingsBuildingError(MavenSettingsError):
    """Raised when effective settings cannot be built from the settings files."""

    def __init__(self, problems: list["SettingsProblem"], **kwargs):
        self.problems = list(problems)
        lines = [f"{len(self.problems)} problem(s) encountered while building the effective settings"]
        lines.extend(str(problem) for problem in self.problems)

        details = kwargs.setdefault("details", {})
        details["problem_count"] = len(self.problems)

        super().__init__(
            "\n".join(lines),
            category=ErrorCategory.DATA_ERROR,
            severity=ErrorSeverity.HIGH,
            user_message="Maven settings files could not be read",
            troubleshooting_hints=[
                "Check that settings.xml is well-formed XML",
                "Every <server> and <mirror> needs an <id>",
                "Every <mirror> needs a <url> and a <mirrorOf>",
            ],
            **kwargs,
        )


class CipherError(MavenSettingsError):
    """Raised when a value cannot be encrypted or decrypted."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.SECURITY_ERROR)
        kwargs.setdefault(
            "troubleshooting_hints",
            [
                "Make sure the value was produced with the same master password",
                "Re-encrypt the password with 'mvnsettings encrypt'",
            ],
        )
        super().__init__(message, **kwargs)


class SecurityFileError(MavenSettingsError):
    """Raised when settings-security.xml cannot be read."""

    def __init__(self, message: str, path: str | None = None, **kwargs):
        if path:
            kwargs.setdefault("details", {})["path"] = path

        super().__init__(
            message,
            category=ErrorCategory.SECURITY_ERROR,
            severity=ErrorSeverity.HIGH,
            troubleshooting_hints=[
                "settings-security.xml must contain a <master> element",
                "Generate a master password with 'mvnsettings encrypt-master'",
            ],
            **kwargs,
        )


def create_user_friendly_error(error: Exception) -> str:
    """Create a user-friendly error message from any exception."""
    if isinstance(error, MavenSettingsError):
        return error.user_message

    if isinstance(error, FileNotFoundError):
        return f"File not found: {error.filename}"
    if isinstance(error, PermissionError):
        return f"Permission denied: {error.filename}"

    return f"An unexpected error occurred: {error!s}"
