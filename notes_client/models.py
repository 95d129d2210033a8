from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class User(BaseModel):
    id: int
    username: str
    created_at: datetime


class Note(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    tags: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, value):
        return value or ""

    def tag_list(self) -> List[str]:
        """Split the comma-separated ``tags`` string, dropping blanks."""
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]


class AuthResult(BaseModel):
    user: User
    token: str
