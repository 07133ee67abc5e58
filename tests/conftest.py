"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Domain collaborators (hasher, token issuer)
- In-memory ports and a fully wired AccountService
- Request payload factories
"""

from datetime import datetime, timezone

import pytest

from src.adapters.tasks.background import InlineDispatcher
from src.domain.accounts import AccountService
from src.domain.passwords import PasswordHasher
from src.domain.tokens import ConfirmationTokenIssuer
from tests.fakes import (
    TEST_SECRET,
    VERIFICATION_URL_BASE,
    InMemoryAccountRepository,
    RecordingSender,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    """Low-cost hasher; bcrypt's minimum work factor keeps tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer() -> ConfirmationTokenIssuer:
    return ConfirmationTokenIssuer(secret=TEST_SECRET)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def service(
    repository: InMemoryAccountRepository,
    hasher: PasswordHasher,
    token_issuer: ConfirmationTokenIssuer,
    sender: RecordingSender,
) -> AccountService:
    """AccountService wired to in-memory ports with inline dispatch."""
    return AccountService(
        repository=repository,
        hasher=hasher,
        token_issuer=token_issuer,
        confirmation_sender=sender,
        dispatcher=InlineDispatcher(),
        verification_url_base=VERIFICATION_URL_BASE,
    )


@pytest.fixture
def create_payload() -> dict:
    """Valid JSON body for POST /v1/users."""
    return {
        "first_name": "Ada",
        "family_name": "Lovelace",
        "email": "ada@example.com",
        "password": "Secret123!",
        "confirm_password": "Secret123!",
        "gender": "Female",
        "role": "User",
    }


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
