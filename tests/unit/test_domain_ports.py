"""
Unit tests for domain ports and exceptions.

Tests verify:
- Enumerations and value types are properly defined
- Exceptions carry the error response shape
- Domain purity (zero framework imports)
"""

import json
from enum import Enum
from pathlib import Path

import pytest

from src.domain.exceptions import (
    AccountError,
    DuplicateEmail,
    ErrorKind,
    HashingFailure,
    NotFound,
    ValidationFailure,
)
from src.domain.ports import (
    Account,
    AccountRepository,
    AccountView,
    BackgroundDispatcher,
    ConfirmationSender,
    Gender,
    Role,
)

DOMAIN_DIR = Path(__file__).resolve().parents[2] / "src" / "domain"


class TestEnums:
    """Tests for Gender and Role."""

    def test_gender_values(self) -> None:
        assert [g.value for g in Gender] == ["Male", "Female"]

    def test_role_values(self) -> None:
        assert [r.value for r in Role] == ["Admin", "User"]

    def test_enums_are_str_mixins(self) -> None:
        """str mixin allows direct JSON serialization."""
        assert issubclass(Gender, str) and issubclass(Gender, Enum)
        assert json.dumps(Role.ADMIN) == '"Admin"'
        assert Gender.MALE == "Male"


class TestAccountView:
    """Tests for the public projection."""

    def test_from_account_drops_password_hash(self) -> None:
        account = Account(
            id=3,
            first_name="Alan",
            family_name="Turing",
            email="alan@example.com",
            password_hash="$2b$10$secret",
            gender=Gender.MALE,
            role=Role.ADMIN,
        )

        view = AccountView.from_account(account)

        assert view == AccountView(3, "Alan", "Turing", "alan@example.com", Gender.MALE, Role.ADMIN)
        assert "password_hash" not in view.__dataclass_fields__


class TestProtocols:
    """Tests for port interfaces."""

    @pytest.mark.parametrize(
        "method",
        [
            "find_by_id",
            "find_by_email",
            "insert",
            "update",
            "delete",
            "list_all",
            "create_verification_record",
        ],
    )
    def test_repository_defines_method(self, method: str) -> None:
        assert hasattr(AccountRepository, method)

    def test_confirmation_sender_defines_send_confirmation(self) -> None:
        assert hasattr(ConfirmationSender, "send_confirmation")

    def test_dispatcher_defines_submit(self) -> None:
        assert hasattr(BackgroundDispatcher, "submit")


class TestDomainExceptions:
    """Tests for domain exception hierarchy."""

    def test_validation_failure_shape(self) -> None:
        error = ValidationFailure("password_mismatch")

        assert isinstance(error, AccountError)
        assert error.kind is ErrorKind.BAD_REQUEST
        assert error.to_dict() == {
            "message": ["Passwords must match"],
            "error": "Bad Request",
            "status": 400,
        }

    def test_not_found_shape(self) -> None:
        assert NotFound.for_account(12).to_dict() == {
            "message": ["User with id 12 not found"],
            "error": "Not Found",
            "status": 404,
        }

    def test_no_records_message(self) -> None:
        assert NotFound.no_records().messages == ["No records found"]

    @pytest.mark.parametrize(
        "reason,message",
        [
            ("password_mismatch", "Passwords must match"),
            ("duplicate_credentials", "Invalid credentials"),
            ("same_password", "The current and new password cannot be the same"),
            ("invalid_current_password", "Current password is incorrect"),
        ],
    )
    def test_validation_messages(self, reason: str, message: str) -> None:
        error = ValidationFailure(reason)
        assert error.reason == reason
        assert error.messages == [message]
        assert str(error) == message

    def test_unknown_reason_rejected(self) -> None:
        with pytest.raises(KeyError):
            ValidationFailure("no_such_reason")

    def test_error_kind_status(self) -> None:
        assert ErrorKind.BAD_REQUEST.status == 400
        assert ErrorKind.NOT_FOUND.status == 404

    @pytest.mark.parametrize("exc_type", [HashingFailure, DuplicateEmail])
    def test_unclassified_errors_are_not_account_errors(self, exc_type: type) -> None:
        assert not issubclass(exc_type, AccountError)


class TestDomainPurity:
    """Tests for domain layer purity."""

    @pytest.mark.parametrize("framework", ["fastapi", "pydantic", "psycopg"])
    def test_no_framework_imports_in_domain(self, framework: str) -> None:
        """Domain layer imports no web, validation or database framework."""
        offenders = [
            path.name
            for path in DOMAIN_DIR.glob("*.py")
            if f"import {framework}" in path.read_text()
            or f"from {framework}" in path.read_text()
        ]
        assert offenders == [], f"{framework} import found in: {offenders}"
