"""Custom exceptions for the formatting context."""

from pathlib import Path
from typing import Iterable, Optional


class InvalidOptionError(ValueError):
    """
    Exception raised when a conversion option is outside its allowed values.

    Attributes:
        option: Name of the offending option (e.g., 'latex_engine')
        value: The rejected value
        allowed: Values the option accepts
    """

    def __init__(self, option: str, value, allowed: Optional[Iterable] = None):
        self.option = option
        self.value = value
        self.allowed = list(allowed) if allowed is not None else []

        message = f"Invalid value for '{option}': {value!r}"
        if self.allowed:
            message += f". Allowed values: {', '.join(repr(a) for a in self.allowed)}"

        super().__init__(message)


class MissingToolchainError(RuntimeError):
    """
    Exception raised when an external tool needed for option resolution is unavailable.

    Attributes:
        tool: Name of the missing tool (e.g., 'pandoc')
        hint: Installation hint appended to the message
    """

    def __init__(self, tool: str, hint: Optional[str] = None):
        self.tool = tool
        self.hint = hint or f"Install {tool} and make sure it is on the PATH."

        super().__init__(f"{tool} is not available. {self.hint}")


class FileSystemError(OSError):
    """
    Exception raised when staging or writing a conversion file fails.

    Attributes:
        message: Error description
        path: File or directory involved
        operation: What was being attempted (e.g., 'copy', 'write')
        original_error: The underlying OSError
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.operation = operation
        self.original_error = original_error

        parts = [message]

        if operation and path:
            parts.append(f"Operation: {operation} {path}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))
