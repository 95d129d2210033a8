"""
Client for the personal notes API: one method per endpoint.
"""
from .client import ApiError, NotesClient, NotLoggedIn, SessionExpired
from .models import AuthResult, Note, User

__all__ = [
    "ApiError",
    "AuthResult",
    "Note",
    "NotesClient",
    "NotLoggedIn",
    "SessionExpired",
    "User",
]
