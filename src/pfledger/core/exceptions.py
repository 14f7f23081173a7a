"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class CurrencyMismatchError(ValidationError):
    """Raised when money of two different currencies is combined."""

    def __init__(self, left: str, right: str):
        super().__init__(f"Currency mismatch: {left} vs {right}")
        self.left = left
        self.right = right


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InvariantViolation(AppError):
    """
    Raised on programmer errors that break a structural invariant.

    Example: asking a cross entry about a transaction it does not manage.
    """

    def __init__(self, message: str):
        super().__init__(message, code="INVARIANT_VIOLATION")


class AttachmentError(AppError):
    """Raised when an owner refuses to attach a transaction."""

    def __init__(self, message: str):
        super().__init__(message, code="ATTACHMENT_ERROR")


class CrossEntryLookupError(AppError):
    """Raised when the cross entry of a paired transaction cannot be resolved."""

    def __init__(self, txn_id: str):
        super().__init__(
            f"No cross entry found for transaction {txn_id}",
            code="LOOKUP_ERROR",
        )
        self.txn_id = txn_id
