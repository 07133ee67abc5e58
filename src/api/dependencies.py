"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import BackgroundTasks, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.smtp.console import ConsoleConfirmationSender
from src.adapters.smtp.sender import SmtpConfirmationSender
from src.adapters.tasks.background import BackgroundTasksDispatcher
from src.config.settings import Settings, get_settings
from src.domain.accounts import AccountService
from src.domain.passwords import PasswordHasher
from src.domain.ports import ConfirmationSender
from src.domain.tokens import ConfirmationTokenIssuer


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


def build_confirmation_sender(settings: Settings) -> ConfirmationSender:
    """Select the email adapter configured by email_backend."""
    if settings.email_backend == "smtp":
        return SmtpConfirmationSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_password,
            sender=settings.email_from,
            use_tls=settings.smtp_use_tls,
        )
    return ConsoleConfirmationSender()


# Singletons below are stateless or hold read-only configuration


@lru_cache
def get_confirmation_sender() -> ConfirmationSender:
    return build_confirmation_sender(get_settings())


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_cost)


@lru_cache
def get_token_issuer() -> ConfirmationTokenIssuer:
    settings = get_settings()
    return ConfirmationTokenIssuer(
        secret=settings.confirm_email_jwt_secret,
        algorithm=settings.confirm_email_jwt_algorithm,
        ttl_hours=settings.confirm_token_ttl_hours,
    )


def get_account_service(
    request: Request, background_tasks: BackgroundTasks
) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires together the repository, hasher, token issuer, email sender and
    background dispatcher for the domain service. Confirmation emails are
    queued on this request's BackgroundTasks and sent after the response.
    """
    settings = get_settings()
    return AccountService(
        repository=get_repository(request),
        hasher=get_password_hasher(),
        token_issuer=get_token_issuer(),
        confirmation_sender=get_confirmation_sender(),
        dispatcher=BackgroundTasksDispatcher(background_tasks),
        verification_url_base=settings.api_url,
    )
