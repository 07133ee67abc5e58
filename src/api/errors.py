"""
API error translation.

Maps classified domain errors onto the error response shape. Handlers
branch on the error's kind tag, never on the concrete exception class.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domain.exceptions import AccountError


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Render an AccountError as {message, error, status}."""
    return JSONResponse(status_code=exc.kind.status, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountError, account_error_handler)
