import logging

from fastapi import APIRouter, Depends

from notes_database import CredentialStore, UsernameTaken

from ..auth import AuthService
from ..deps import get_auth_service, get_credential_store
from ..errors import Conflict, InvalidCredentials, ValidationError, require_fields
from ..schemas import AuthResponse, Credentials, ErrorResponse, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


# PUBLIC_INTERFACE
@router.post(
    "/register",
    status_code=201,
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Register a new user",
)
def register(
    payload: Credentials,
    users: CredentialStore = Depends(get_credential_store),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.
    Returns a bearer token together with the new user record (no password hash).
    """
    require_fields(username=payload.username, password=payload.password)
    if len(payload.username) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters", fields=["username"]
        )
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", fields=["password"]
        )

    try:
        user = users.create(payload.username, payload.password)
    except UsernameTaken:
        raise Conflict("Username already exists")

    return {
        "message": "User registered successfully",
        "token": auth_service.issue_token(user),
        "user": UserOut.model_validate(user),
    }


# PUBLIC_INTERFACE
@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Login and get a bearer token",
)
def login(
    payload: Credentials,
    users: CredentialStore = Depends(get_credential_store),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    User login.
    Unknown usernames and wrong passwords produce the same 401.
    """
    require_fields(username=payload.username, password=payload.password)
    user = users.verify(payload.username, payload.password)
    if user is None:
        logger.info("Failed login attempt")
        raise InvalidCredentials()
    return {
        "message": "Login successful",
        "token": auth_service.issue_token(user),
        "user": UserOut.model_validate(user),
    }
