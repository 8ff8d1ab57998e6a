class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingColumnsError(ValidationError):
    """Raised when an uploaded roster lacks required header columns."""

    def __init__(self, missing: list[str], required: list[str]):
        self.missing = list(missing)
        self.required = list(required)
        wanted = ", ".join(f'"{h}"' for h in self.required)
        super().__init__(f"Header kolom tidak sesuai. Pastikan ada kolom {wanted}.")


class EmptyImportError(ValidationError):
    """Raised when no valid row survives roster filtering."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class AuthorizationError(DomainError):
    """Raised when a profile lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when the storage backend rejects an operation.

    The backend message is kept as the exception message.
    """
