class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class BufferLimitError(ValidationError):
    """Raised when an employee already has the maximum number of buffer days."""


class UploadError(DomainError):
    """Raised when an uploaded workbook cannot be turned into a salary sheet."""


class NotFoundError(DomainError):
    """Raised when a workspace or employee does not exist."""
