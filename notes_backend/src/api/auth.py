"""
Issuing and verifying bearer tokens.

Tokens are stateless HS256 JWTs; validity depends only on the signature and
the ``exp`` claim. There is no revocation list, so a leaked token stays
usable until it expires.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(hours=24)


class InvalidToken(Exception):
    """Bad signature, malformed structure, missing claims, or expired."""


class Identity(BaseModel):
    """The caller as asserted by a verified token."""

    id: int
    username: str


# PUBLIC_INTERFACE
class AuthService:
    """
    Signs and verifies tokens with an explicitly supplied secret key.
    """

    def __init__(self, secret_key: str, algorithm: str = ALGORITHM, expires_delta: Optional[timedelta] = None):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = ACCESS_TOKEN_EXPIRE if expires_delta is None else expires_delta

    def issue_token(self, user) -> str:
        """Encode ``user.id`` and ``user.username`` with issue and expiry times."""
        issued_at = datetime.now(timezone.utc)
        claims = {
            "sub": str(user.id),
            "id": user.id,
            "username": user.username,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Identity:
        """Decode ``token``; raises InvalidToken on any failure."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc
        try:
            return Identity(id=payload["id"], username=payload["username"])
        except (KeyError, PydanticValidationError) as exc:
            raise InvalidToken("Token payload is missing identity claims") from exc
