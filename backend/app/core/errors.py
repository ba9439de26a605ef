"""
Application error taxonomy and store-error conversion.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized: No token or incorrect format."


class TokenExpired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized: Token has expired."


class InvalidCredential(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized: Invalid token."


class InvalidInput(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden."


class ServiceUnavailable(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Database services not ready."


class StoreError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def handle_store_errors(message: str, db: Optional[Session] = None) -> Iterator[None]:
    """
    Convert unexpected SQLAlchemy failures into a StoreError carrying a
    route-specific message. The session is rolled back and the detail is
    logged server-side only.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        if db is not None:
            db.rollback()
        logger.error(f"{message} ({exc.__class__.__name__})", exc_info=True)
        raise StoreError(message) from exc
