"""
Custom Exceptions Module.

This module defines the exceptions raised by the extraction engine and
its surrounding input/output layers. Absence of a field is never an
error; only caller mistakes and I/O failures surface as exceptions.

Exception Hierarchy:
    InvoiceFieldsError (base)
    ├── InputError
    │   ├── UnsupportedFileTypeError
    │   └── FragmentFormatError
    ├── PreconditionError (also a ValueError)
    └── OutputError
        └── ExportError
"""


class InvoiceFieldsError(Exception):
    """
    Base exception for all extraction engine errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(InvoiceFieldsError):
    """Base exception for input handling errors."""
    pass


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".pdf", [".json"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class FragmentFormatError(InputError):
    """Raised when a fragment document cannot be decoded."""

    def __init__(self, source: str, reason: str = None):
        message = f"Invalid fragment document: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# PROGRAMMING ERRORS
# =============================================================================

class PreconditionError(InvoiceFieldsError, ValueError):
    """
    Raised when a call violates a documented precondition.

    Example:
        >>> raise PreconditionError("tolerance", 0, "must be positive")
    """

    def __init__(self, argument: str, value, reason: str = None):
        message = f"Precondition failed for '{argument}'"
        details = {"argument": argument, "value": value, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(InvoiceFieldsError):
    """Base exception for output handling errors."""
    pass


class ExportError(OutputError):
    """Raised when writing extraction results fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export results: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'InvoiceFieldsError',
    'InputError',
    'UnsupportedFileTypeError',
    'FragmentFormatError',
    'PreconditionError',
    'OutputError',
    'ExportError',
]
