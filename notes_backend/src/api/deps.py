"""
FastAPI dependencies: per-request database session, stores, and the
request gate guarding protected routes.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notes_database import CredentialStore, NoteStore

from .auth import AuthService, Identity, InvalidToken
from .errors import Forbidden, Unauthenticated

# auto_error=False so a missing token maps to our 401 body instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request):
    """Yields a session from the app's session factory and always closes it."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_credential_store(db=Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_note_store(db=Depends(get_db)) -> NoteStore:
    return NoteStore(db)


# PUBLIC_INTERFACE
def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Identity:
    """
    Request gate for protected routes.

    No bearer token -> 401. A token that fails verification -> 403.
    The decoded identity is trusted as-is; the user row is not re-read.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    try:
        return auth_service.verify_token(credentials.credentials)
    except InvalidToken:
        raise Forbidden()
