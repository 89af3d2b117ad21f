"""Domain-specific exceptions for the experiment API.

This module contains exceptions that represent invalid caller input,
missing records and storage failures within the domain layer. Token
verification failures are deliberately absent: they are reported as a
verification result, never raised.
"""


class DomainError(Exception):
    """Base exception for all domain-related errors."""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class InvalidRequestError(DomainError):
    """Raised when caller input is malformed or missing."""

    def __init__(self, message: str = "Invalid request", error_code: str = "INVALID_REQUEST"):
        super().__init__(message, error_code)


class MissingIdentifierError(InvalidRequestError):
    """Raised when neither the request nor a token supplies a session identifier."""

    def __init__(self):
        super().__init__("Missing experiment id", "MISSING_IDENTIFIER")


class SigningUnavailableError(DomainError):
    """Raised when a link is requested but no signing secret is configured."""

    def __init__(self):
        super().__init__("External link signing is not configured", "SIGNING_UNAVAILABLE")


class RecordNotFoundError(DomainError):
    """Raised when no stored document matches the lookup."""

    def __init__(self, session_id: str):
        super().__init__("Experiment not found", "RECORD_NOT_FOUND")
        self.session_id = session_id


class RepositoryError(DomainError):
    """Base exception for repository-related errors."""
    pass


class StorageError(RepositoryError):
    """Raised when the document store fails to answer a query."""

    def __init__(self, operation: str, details: str = None):
        super().__init__(f"Document store operation failed: {operation}", "STORAGE_ERROR")
        self.operation = operation
        self.details = details
