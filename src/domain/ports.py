"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the value types the account lifecycle works with and
the interfaces (ports) it requires from infrastructure. Adapters implement
these protocols through structural subtyping.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class Role(str, Enum):
    ADMIN = "Admin"
    USER = "User"


@dataclass(frozen=True)
class Account:
    """Stored account record, including the password hash."""

    id: int
    first_name: str
    family_name: str
    email: str
    password_hash: str
    gender: Gender
    role: Role


@dataclass(frozen=True)
class AccountView:
    """
    Public projection of an account.

    This is the only account shape that leaves the domain layer;
    it has no password field at all.
    """

    id: int
    first_name: str
    family_name: str
    email: str
    gender: Gender
    role: Role

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(
            id=account.id,
            first_name=account.first_name,
            family_name=account.family_name,
            email=account.email,
            gender=account.gender,
            role=account.role,
        )


@dataclass(frozen=True)
class NewAccount:
    """Fields inserted for a new account (password already hashed)."""

    first_name: str
    family_name: str
    email: str
    password_hash: str
    gender: Gender
    role: Role


@dataclass(frozen=True)
class VerificationRecord:
    """Email verification issued for a freshly created account."""

    account_id: int
    token: str
    confirm_code: int
    token_expiry: datetime


@dataclass(frozen=True)
class CreateAccount:
    first_name: str
    family_name: str
    email: str
    password: str
    confirm_password: str
    gender: Gender
    role: Role


@dataclass(frozen=True)
class UpdateAccount:
    """Patch for the mutable profile fields. None means "leave as is"."""

    first_name: str | None = None
    family_name: str | None = None
    gender: Gender | None = None


@dataclass(frozen=True)
class ChangePassword:
    current_password: str
    new_password: str
    confirm_new_password: str


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def find_by_id(self, account_id: int) -> Account | None:
        ...

    def find_by_email(self, email: str) -> Account | None:
        ...

    def insert(self, fields: NewAccount) -> Account:
        """
        Insert a new account and return it with its assigned id.

        Raises:
            DuplicateEmail: If the store's unique constraint on email fails
        """
        ...

    def update(self, account_id: int, fields: Mapping[str, object]) -> Account | None:
        """
        Update the given columns of an account.

        Returns:
            Updated account, or None if the row no longer exists
        """
        ...

    def delete(self, account_id: int) -> Account | None:
        """
        Hard-delete an account.

        Returns:
            The deleted account, or None if the row no longer exists
        """
        ...

    def list_all(self) -> list[Account]:
        ...

    def create_verification_record(self, record: VerificationRecord) -> None:
        ...


class ConfirmationSender(Protocol):
    """Port interface for confirmation email delivery."""

    def send_confirmation(
        self,
        recipient_name: str,
        verification_link: str,
        confirmation_code: str,
        recipient_email: str,
    ) -> None:
        """
        Deliver the email confirmation message.

        Args:
            recipient_name: First name used in the greeting
            verification_link: Link embedding the signed confirmation token
            confirmation_code: 8-digit code, as text
            recipient_email: Destination address
        """
        ...


class BackgroundDispatcher(Protocol):
    """Port interface for work that must not delay the caller."""

    def submit(self, task: Callable[[], None]) -> None:
        """Schedule task for execution without waiting for it."""
        ...
