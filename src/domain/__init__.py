"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account lifecycle logic: validation rules,
password hashing, confirmation token issuance and the error taxonomy.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .accounts import AccountService
from .exceptions import (
    AccountError,
    DuplicateEmail,
    ErrorKind,
    HashingFailure,
    InvalidConfirmationToken,
    NotFound,
    ValidationFailure,
)
from .passwords import PasswordHasher
from .ports import (
    Account,
    AccountRepository,
    AccountView,
    BackgroundDispatcher,
    ChangePassword,
    ConfirmationSender,
    CreateAccount,
    Gender,
    NewAccount,
    Role,
    UpdateAccount,
    VerificationRecord,
)
from .tokens import ConfirmationClaims, ConfirmationTokenIssuer

__all__ = [
    "Account",
    "AccountError",
    "AccountRepository",
    "AccountService",
    "AccountView",
    "BackgroundDispatcher",
    "ChangePassword",
    "ConfirmationClaims",
    "ConfirmationSender",
    "ConfirmationTokenIssuer",
    "CreateAccount",
    "DuplicateEmail",
    "ErrorKind",
    "Gender",
    "HashingFailure",
    "InvalidConfirmationToken",
    "NewAccount",
    "NotFound",
    "PasswordHasher",
    "Role",
    "UpdateAccount",
    "ValidationFailure",
    "VerificationRecord",
]
