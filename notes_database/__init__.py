"""
Persistence layer for the personal notes backend.

Holds the SQLAlchemy models, engine helpers and the two stores the API
talks to: ``CredentialStore`` (users and password hashes) and ``NoteStore``
(owner-scoped notes).
"""
from .credential_store import CredentialStore, UsernameTaken, pwd_context
from .db import get_database_url, make_engine, make_session_factory
from .models import Base, Note, User
from .note_store import NoteStore

__all__ = [
    "Base",
    "CredentialStore",
    "Note",
    "NoteStore",
    "User",
    "UsernameTaken",
    "get_database_url",
    "make_engine",
    "make_session_factory",
    "pwd_context",
]
