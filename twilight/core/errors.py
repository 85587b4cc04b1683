import enum
import logging
from contextlib import contextmanager

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE = "STORE"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.STORE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


@contextmanager
def store_errors(db: Session, operation: str):
    """Roll back, log and re-raise store failures as a generic AppError."""
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        logger.warning("%s violated a constraint: %s", operation, exc.orig)
        raise AppError(ErrorKind.CONFLICT, "Record already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("%s failed", operation)
        raise AppError(ErrorKind.STORE, "Server Error") from exc


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "bad request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "cookie", "header")]
    field = loc[-1] if loc else "body"
    if first.get("type") in ("missing", "string_too_short"):
        return f"bad request : missing {field}"
    return f"bad request : invalid {field}"


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"result": False, "message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"result": False, "message": _validation_message(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"result": False, "message": "Server Error"},
    )


def register_error_handlers(app):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
