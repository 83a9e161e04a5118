"""Application exceptions and their HTTP rendering.

Every error raised by services and auth dependencies derives from AppError.
A single exception handler renders them as ``{"message": ...}`` with the
error's status code, so route handlers never build error responses by hand.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class InvalidRequestError(AppError):
    """Request is well-formed but violates a business rule."""


class InvalidCredentialsError(AppError):
    """Signin failed. The message never says which field was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class DuplicateUsernameError(AppError):
    def __init__(self) -> None:
        super().__init__("Error: Username is already taken!")


class DuplicateEmailError(AppError):
    def __init__(self) -> None:
        super().__init__("Error: Email is already in use!")


class DuplicateCategoryError(AppError):
    def __init__(self) -> None:
        super().__init__("Error: Category name is already in use!")


class NotAuthenticatedError(AppError):
    """Guarded operation reached without a principal."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Not authenticated")


class AccessDeniedError(AppError):
    """Principal lacks every role the operation accepts."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self) -> None:
        super().__init__("Access denied")


class AdminAccessRequiredError(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self) -> None:
        super().__init__("Admin access required")


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class UserNotFoundError(NotFoundError):
    def __init__(self, identifier: str) -> None:
        super().__init__("User", identifier)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as {"message": ...}."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )
