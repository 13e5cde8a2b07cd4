"""
Common exception classes for termshell.

This module defines custom exception classes used throughout the shell
for better error handling and categorization.
"""

from __future__ import annotations


class TermShellError(Exception):
    """Base exception class for all shell errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class ProcessExitedError(TermShellError):
    """Raised by ``ExecutionProcess.exit`` to unwind a running handler."""

    def __init__(self, code: int = 0, details: dict | None = None, **kwargs):
        super().__init__(f"Process exited with code {code}", details, **kwargs)
        self.code = code


class InputRequestActiveError(TermShellError):
    """Raised when a reader prompt is issued while another one is pending."""

    def __init__(
        self,
        message: str = "Another input request is already active",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class InvalidSelectOptionsError(TermShellError):
    """Raised when a select prompt is issued without options."""

    def __init__(
        self,
        message: str = "read_select requires at least one option",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class InputModeStackError(TermShellError):
    """Raised when the input mode stack would lose its base mode."""

    def __init__(
        self,
        message: str = "Cannot pop the base input mode",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class ProcessorRegistrationError(TermShellError):
    """Raised when a processor cannot be registered."""

    def __init__(
        self,
        message: str = "Invalid command processor",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class ServiceResolutionError(TermShellError):
    """Raised when a keyed service lookup fails."""

    def __init__(
        self,
        message: str = "Service resolution failed",
        service_name: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.service_name = service_name


class ConfigurationError(TermShellError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
