import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DocmanError(Exception):
    """Base error. Every subclass maps to one HTTP status and a user-visible message."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequired(DocmanError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication is required. No token provided."


class InvalidToken(DocmanError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token. Login or register to continue"


class SessionInvalidated(DocmanError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please sign in or register to continue."


class Forbidden(DocmanError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are restricted from performing this action."


class ImmutableFieldViolation(Forbidden):
    default_message = "You cannot update ownerId."


class AdminProtected(Forbidden):
    default_message = "You can not delete an admin!"


class NotFound(DocmanError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class ValidationError(DocmanError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    err = errors[0]
    # custom validators carry their own message in ctx["error"]
    ctx = err.get("ctx") or {}
    if err.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    field = next((str(p) for p in reversed(err.get("loc", ())) if isinstance(p, str) and p != "body"), None)
    if err.get("type") == "missing" and field:
        return f"{field} is required."
    if field:
        return f"{field}: {err.get('msg')}"
    return str(err.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DocmanError)
    async def docman_error_handler(request: Request, exc: DocmanError):
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
            return JSONResponse(
                status_code=exc.status_code,
                content={"message": exc.message},
                headers={"WWW-Authenticate": "Bearer"},
            )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _first_validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("%s on %s (500): %s", type(exc).__name__, request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error."},
        )
