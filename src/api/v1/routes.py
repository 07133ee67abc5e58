"""
API v1 routes.

Defines REST endpoints for the account management API. Classified domain
errors raised by the service are rendered by the AccountError handler
registered on the application (see src.api.errors).
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_account_service
from src.api.models import (
    AccountListResponse,
    AccountResponse,
    ChangePasswordRequest,
    CreateAccountRequest,
    ErrorResponse,
    UpdateAccountRequest,
)
from src.domain.accounts import AccountService
from src.domain.ports import ChangePassword, CreateAccount, UpdateAccount

router = APIRouter(prefix="/users", tags=["v1"])

_BAD_REQUEST = {"model": ErrorResponse, "description": "Business rule violated"}
_NOT_FOUND = {"model": ErrorResponse, "description": "User not found"}


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _BAD_REQUEST, 422: {"description": "Validation error"}},
    summary="Create a new user",
    description="Create an account and send an email confirmation link and code.",
)
async def create_user(
    request_data: CreateAccountRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    """
    Create a new user.

    - **password** and **confirm_password** must match
    - an already registered email yields a generic "Invalid credentials"
    """
    view = service.create(
        CreateAccount(
            first_name=request_data.first_name,
            family_name=request_data.family_name,
            email=request_data.email,
            password=request_data.password,
            confirm_password=request_data.confirm_password,
            gender=request_data.gender,
            role=request_data.role,
        )
    )
    return AccountResponse.model_validate(view)


@router.get(
    "",
    response_model=AccountListResponse,
    responses={404: {"model": ErrorResponse, "description": "No users found"}},
    summary="Get all users",
)
async def get_all_users(
    service: AccountService = Depends(get_account_service),
) -> AccountListResponse:
    views = service.get_all()
    return AccountListResponse(users=[AccountResponse.model_validate(view) for view in views])


@router.get(
    "/{user_id}",
    response_model=AccountResponse,
    responses={404: _NOT_FOUND},
    summary="Get user by ID",
)
async def get_user(
    user_id: int,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return AccountResponse.model_validate(service.find_one(user_id))


@router.put(
    "/{user_id}",
    response_model=AccountResponse,
    responses={404: _NOT_FOUND, 422: {"description": "Validation error"}},
    summary="Update user by ID",
    description="Update first name, family name and/or gender. "
    "Email and role cannot be changed through this endpoint.",
)
async def update_user(
    user_id: int,
    request_data: UpdateAccountRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    view = service.update(
        user_id,
        UpdateAccount(
            first_name=request_data.first_name,
            family_name=request_data.family_name,
            gender=request_data.gender,
        ),
    )
    return AccountResponse.model_validate(view)


@router.delete(
    "/{user_id}",
    response_model=AccountResponse,
    responses={404: _NOT_FOUND},
    summary="Delete user by ID",
)
async def delete_user(
    user_id: int,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    return AccountResponse.model_validate(service.delete(user_id))


@router.patch(
    "/change-password/{user_id}",
    response_model=AccountResponse,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "New passwords differ, equal the current one, "
            "or the current password is incorrect",
        },
        404: _NOT_FOUND,
        422: {"description": "Validation error"},
    },
    summary="Change user password",
)
async def change_password(
    user_id: int,
    request_data: ChangePasswordRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountResponse:
    view = service.change_password(
        user_id,
        ChangePassword(
            current_password=request_data.current_password,
            new_password=request_data.new_password,
            confirm_new_password=request_data.confirm_new_password,
        ),
    )
    return AccountResponse.model_validate(view)
