"""Domain exceptions for the build server."""

from typing import Optional


class DomainException(Exception):
    """Base exception for domain-related errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationException(DomainException):
    """Raised when a build request is missing a required field."""

    def __init__(self, field_name: str) -> None:
        """
        Initialize validation exception.

        Args:
            field_name: Name of the missing request field
        """
        message = f"{field_name} is required"
        super().__init__(message, f"Field: {field_name}")
        self.field_name = field_name


class BuildException(DomainException):
    """Raised when the external build tool fails or cannot be started."""

    def __init__(
        self,
        task_id: str,
        reason: str,
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        """
        Initialize build exception.

        Args:
            task_id: Identifier of the failed task
            reason: Specific reason for the failure
            exit_code: Exit status of the build tool, None if it never started
            stderr: Tail of the build tool's error output
        """
        message = f"Build {task_id} failed: {reason}"
        super().__init__(message, stderr)
        self.task_id = task_id
        self.reason = reason
        self.exit_code = exit_code
        self.stderr = stderr


class FatalException(DomainException):
    """Raised for failures that must terminate the process."""
