"""
Account lifecycle domain service.

This module contains the business logic for user accounts: creation with
email confirmation, lookup, listing, profile update, deletion and password
change.

Rule Ordering
=============

Checks that only look at the submitted values (password confirmation,
same-password) always run before the repository is touched, so a malformed
request never causes a lookup. The existence check always runs before
password verification, so an unknown id yields NotFound rather than
revealing whether a password would have matched.

Email Uniqueness
================

The find_by_email() pre-check in create() is best-effort only. Two
concurrent creates for the same address can both pass it; the store's
unique constraint catches the loser, which surfaces as DuplicateEmail and
is reported exactly like the pre-check failure.

Confirmation Email
==================

Sending the confirmation email is handed to the BackgroundDispatcher and
never awaited. Delivery failures are logged and otherwise ignored: the
account and its verification record exist regardless.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from functools import partial

from .exceptions import AccountError, DuplicateEmail, NotFound, ValidationFailure
from .passwords import PasswordHasher
from .ports import (
    Account,
    AccountRepository,
    AccountView,
    BackgroundDispatcher,
    ChangePassword,
    ConfirmationSender,
    CreateAccount,
    NewAccount,
    UpdateAccount,
    VerificationRecord,
)
from .tokens import ConfirmationTokenIssuer

logger = logging.getLogger(__name__)

# Columns a profile update is allowed to touch
_UPDATABLE_FIELDS = ("first_name", "family_name", "gender")


@dataclass
class AccountService:
    """
    Domain service for the account lifecycle.

    All collaborators are passed in explicitly; nothing is looked up
    from ambient state.
    """

    repository: AccountRepository
    hasher: PasswordHasher
    token_issuer: ConfirmationTokenIssuer
    confirmation_sender: ConfirmationSender
    dispatcher: BackgroundDispatcher
    verification_url_base: str

    def create(self, data: CreateAccount) -> AccountView:
        """
        Create an account and start the email confirmation flow.

        Args:
            data: Validated account creation request

        Returns:
            Public projection of the new account

        Raises:
            ValidationFailure: Passwords differ, or the email is taken
        """
        with self._operation("create"):
            self._require_matching(data.password, data.confirm_password)

            email = self._normalize_email(data.email)
            if self.repository.find_by_email(email) is not None:
                raise ValidationFailure("duplicate_credentials")

            password_hash = self.hasher.hash(data.password)

            try:
                account = self.repository.insert(
                    NewAccount(
                        first_name=data.first_name,
                        family_name=data.family_name,
                        email=email,
                        password_hash=password_hash,
                        gender=data.gender,
                        role=data.role,
                    )
                )
            except DuplicateEmail:
                raise ValidationFailure("duplicate_credentials") from None

            issued_at = self.token_issuer.clock()
            token = self.token_issuer.issue(account.id, account.email, issued_at)
            confirm_code = self.token_issuer.generate_confirmation_code()

            self.dispatcher.submit(
                partial(
                    self._send_confirmation,
                    account,
                    self._verification_link(token),
                    confirm_code,
                )
            )

            self.repository.create_verification_record(
                VerificationRecord(
                    account_id=account.id,
                    token=token,
                    confirm_code=confirm_code,
                    token_expiry=self.token_issuer.expiry_for(issued_at),
                )
            )
            logger.info("Account %s created", account.id)
            return AccountView.from_account(account)

    def find_one(self, account_id: int) -> AccountView:
        """
        Raises:
            NotFound: No account with this id
        """
        with self._operation("find_one"):
            return AccountView.from_account(self._get_existing(account_id))

    def get_all(self) -> list[AccountView]:
        """
        List every account.

        An empty store is reported as NotFound, not as an empty list.
        """
        with self._operation("get_all"):
            accounts = self.repository.list_all()
            if not accounts:
                raise NotFound.no_records()
            return [AccountView.from_account(account) for account in accounts]

    def update(self, account_id: int, patch: UpdateAccount) -> AccountView:
        """
        Apply a profile patch. Email and role cannot be changed here.

        Raises:
            NotFound: No account with this id
        """
        with self._operation("update"):
            account = self._get_existing(account_id)

            fields = {
                name: getattr(patch, name)
                for name in _UPDATABLE_FIELDS
                if getattr(patch, name) is not None
            }
            if not fields:
                return AccountView.from_account(account)

            updated = self.repository.update(account_id, fields)
            if updated is None:
                raise NotFound.for_account(account_id)
            return AccountView.from_account(updated)

    def delete(self, account_id: int) -> AccountView:
        """
        Hard-delete an account and return what was removed.

        Raises:
            NotFound: No account with this id
        """
        with self._operation("delete"):
            self._get_existing(account_id)

            deleted = self.repository.delete(account_id)
            if deleted is None:
                raise NotFound.for_account(account_id)
            logger.info("Account %s deleted", account_id)
            return AccountView.from_account(deleted)

    def change_password(self, account_id: int, data: ChangePassword) -> AccountView:
        """
        Replace the password of an account after checking the current one.

        The same-password check compares the submitted plaintexts only;
        it runs before the lookup, even when the current password is wrong.

        Raises:
            ValidationFailure: New passwords differ, new equals current,
                or the current password is incorrect
            NotFound: No account with this id
        """
        with self._operation("change_password"):
            self._require_matching(data.new_password, data.confirm_new_password)
            if data.new_password == data.current_password:
                raise ValidationFailure("same_password")

            account = self._get_existing(account_id)

            if not self.hasher.verify(data.current_password, account.password_hash):
                raise ValidationFailure("invalid_current_password")

            password_hash = self.hasher.hash(data.new_password)
            updated = self.repository.update(account_id, {"password_hash": password_hash})
            if updated is None:
                raise NotFound.for_account(account_id)
            logger.info("Password changed for account %s", account_id)
            return AccountView.from_account(updated)

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """
        Log unexpected failures of an operation and re-raise them unchanged.

        Classified errors are expected client outcomes and are not logged.
        """
        try:
            yield
        except AccountError:
            raise
        except Exception:
            logger.exception("Account operation %s failed", name)
            raise

    def _get_existing(self, account_id: int) -> Account:
        account = self.repository.find_by_id(account_id)
        if account is None:
            raise NotFound.for_account(account_id)
        return account

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _require_matching(self, password: str, confirmation: str) -> None:
        if password != confirmation:
            raise ValidationFailure("password_mismatch")

    def _verification_link(self, token: str) -> str:
        return f"{self.verification_url_base.rstrip('/')}/auth/confirm-email/{token}"

    def _send_confirmation(self, account: Account, link: str, confirm_code: int) -> None:
        """Deliver the confirmation email; failures are logged, never raised."""
        try:
            self.confirmation_sender.send_confirmation(
                account.first_name,
                link,
                str(confirm_code),
                account.email,
            )
        except Exception:
            logger.warning(
                "Confirmation email to account %s could not be sent",
                account.id,
                exc_info=True,
            )
