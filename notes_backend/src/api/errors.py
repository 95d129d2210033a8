"""
Error taxonomy of the notes API and its mapping to JSON responses.

Every error body has the shape ``{"error": "<message>"}``; validation errors
also carry ``"fields"``, the names of the offending request fields.

    NotesAPIError (base, 500)
    ├── ValidationError      400  malformed or missing input
    ├── Unauthenticated      401  no bearer token
    ├── InvalidCredentials   401  wrong username/password
    ├── Forbidden            403  invalid or expired token
    ├── NotFound             404  missing note, or a note owned by someone else
    └── Conflict             409  username already taken
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class NotesAPIError(Exception):
    """Base class; ``status_code`` and ``message`` become the HTTP response."""

    status_code = 500
    default_message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_content(self) -> dict:
        return {"error": self.message}


class ValidationError(NotesAPIError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])

    def to_content(self) -> dict:
        content = super().to_content()
        if self.fields:
            content["fields"] = self.fields
        return content


class Unauthenticated(NotesAPIError):
    status_code = 401
    default_message = "Access token required"


class InvalidCredentials(NotesAPIError):
    status_code = 401
    default_message = "Invalid username or password"


class Forbidden(NotesAPIError):
    status_code = 403
    default_message = "Invalid or expired token"


class NotFound(NotesAPIError):
    # Deliberately covers both "does not exist" and "belongs to another user".
    status_code = 404
    default_message = "Note not found or unauthorized"


class Conflict(NotesAPIError):
    status_code = 409
    default_message = "Username already exists"


# PUBLIC_INTERFACE
def require_fields(**values):
    """Raise ValidationError naming every empty or missing keyword value."""
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}", fields=missing)


def _field_name(loc) -> str:
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn exceptions into ``{"error": ...}`` bodies."""

    @app.exception_handler(NotesAPIError)
    async def handle_notes_api_error(request: Request, exc: NotesAPIError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(error.get("type") == "json_invalid" for error in errors):
            error = ValidationError("Malformed JSON body", fields=["body"])
        else:
            fields = []
            for error in errors:
                name = _field_name(error.get("loc", ()))
                if name not in fields:
                    fields.append(name)
            error = ValidationError(f"Invalid or missing field(s): {', '.join(fields)}", fields=fields)
        return JSONResponse(status_code=error.status_code, content=error.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})
