# app/core/errors.py
import logging
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base class for errors that map to a JSON error response.

    Every error is rendered as:

        {"error": <message>, **extra}

    `extra` carries optional client hints, e.g. `validTypes`.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class AuthenticationError(AppError):
    """No resolvable identity on the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class AuthorizationError(AppError):
    """Identity resolved but not allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    """Datastore failure or unexpected error. Details stay in the logs."""


@contextmanager
def datastore_errors(session: Session, tag: str, message: str) -> Iterator[None]:
    """
    Turn a failed datastore call into an InternalError.

    The session is rolled back so the stored rows stay untouched, and the
    driver error is logged under the route tag instead of reaching the client.

    Usage:

        with datastore_errors(session, "appointments PUT", "Failed to update appointment"):
            repo.update(session, appointment)
    """
    try:
        yield
    except SQLAlchemyError:
        session.rollback()
        logger.exception(f"[{tag}] Datastore error")
        raise InternalError(message)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Payload/query parsing failures are client errors (400), not 422.
    """
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request payload",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[{request.method} {request.url.path}] Unexpected error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": InternalError.default_message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
