from fastapi import APIRouter, Depends

from notes_database import CredentialStore

from ..auth import Identity
from ..deps import get_credential_store, get_current_identity
from ..errors import InvalidCredentials, ValidationError, require_fields
from ..schemas import AccountDeletion, ErrorResponse, MessageResponse, PasswordChange
from .auth import MIN_PASSWORD_LENGTH

router = APIRouter(
    prefix="/api/user",
    tags=["Account"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)


# PUBLIC_INTERFACE
@router.put("/password", response_model=MessageResponse, summary="Change password")
def change_password(
    payload: PasswordChange,
    identity: Identity = Depends(get_current_identity),
    users: CredentialStore = Depends(get_credential_store),
):
    """
    Change the caller's password. The current password must be supplied.
    Existing tokens stay valid.
    """
    require_fields(oldPassword=payload.old_password, newPassword=payload.new_password)
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters", fields=["newPassword"]
        )
    if payload.old_password == payload.new_password:
        raise ValidationError("New password must be different from old password", fields=["newPassword"])

    if not users.update_password(identity.id, payload.old_password, payload.new_password):
        raise InvalidCredentials("Current password is incorrect")
    return {"message": "Password changed successfully"}


# PUBLIC_INTERFACE
@router.delete("/account", response_model=MessageResponse, summary="Delete account")
def delete_account(
    payload: AccountDeletion,
    identity: Identity = Depends(get_current_identity),
    users: CredentialStore = Depends(get_credential_store),
):
    """
    Delete the caller's account and all of their notes after re-checking the password.
    """
    require_fields(password=payload.password)
    if not users.delete_user(identity.id, payload.password):
        raise InvalidCredentials("Password is incorrect")
    return {"message": "Account deleted successfully"}
