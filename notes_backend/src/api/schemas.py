from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Request bodies keep every field optional so that missing values are
# reported by the route as a 400 naming the field, not as a schema error.


class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class NoteIn(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[str] = None


class PasswordChange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: Optional[str] = Field(default=None, alias="oldPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")


class AccountDeletion(BaseModel):
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime


class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    content: str
    tags: str = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value):
        return value or ""


class MessageResponse(BaseModel):
    message: str


class AuthResponse(MessageResponse):
    token: str
    user: UserOut


class NoteResponse(MessageResponse):
    note: NoteOut


class NoteDetailResponse(BaseModel):
    note: NoteOut


class NoteListResponse(BaseModel):
    notes: List[NoteOut]
    count: int


class ErrorResponse(BaseModel):
    error: str
    fields: Optional[List[str]] = None
