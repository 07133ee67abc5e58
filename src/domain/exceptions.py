"""
Domain exceptions - Semantic error types for the account lifecycle.

Classified outcomes (AccountError subclasses) describe expected client-input
failures and carry a category tag plus a human-readable message list.
Everything else is an unclassified fault and propagates unchanged.
"""

from enum import Enum


class ErrorKind(Enum):
    """Category of a classified account error."""

    BAD_REQUEST = "Bad Request"
    NOT_FOUND = "Not Found"

    @property
    def status(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
}


class AccountError(Exception):
    """Base class for classified account lifecycle errors."""

    kind: ErrorKind

    def __init__(self, *messages: str) -> None:
        super().__init__(*messages)
        self.messages = list(messages)

    def to_dict(self) -> dict:
        """Render the error response shape: message list, label and status."""
        return {
            "message": self.messages,
            "error": self.kind.value,
            "status": self.kind.status,
        }


class ValidationFailure(AccountError):
    """Business rule rejected the request (400)."""

    kind = ErrorKind.BAD_REQUEST

    MESSAGES = {
        "password_mismatch": "Passwords must match",
        # Generic on purpose: must not reveal that the email is taken
        "duplicate_credentials": "Invalid credentials",
        "same_password": "The current and new password cannot be the same",
        "invalid_current_password": "Current password is incorrect",
    }

    def __init__(self, reason: str) -> None:
        super().__init__(self.MESSAGES[reason])
        self.reason = reason


class NotFound(AccountError):
    """Requested account (or any account) does not exist (404)."""

    kind = ErrorKind.NOT_FOUND

    @classmethod
    def for_account(cls, account_id: int) -> "NotFound":
        return cls(f"User with id {account_id} not found")

    @classmethod
    def no_records(cls) -> "NotFound":
        return cls("No records found")


class HashingFailure(Exception):
    """The password hashing primitive failed. Fatal, never retried."""

    pass


class DuplicateEmail(Exception):
    """The store's uniqueness constraint rejected an email address."""

    pass


class InvalidConfirmationToken(Exception):
    """Confirmation token signature, claims or expiry did not check out."""

    pass
