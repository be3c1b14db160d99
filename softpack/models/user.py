"""User data models for authentication"""

from typing import Literal

from pydantic import BaseModel, ConfigDict


Role = Literal["user", "admin"]


class UserRecord(BaseModel):
    """Stored user row. `password` holds the encoded salt+hash, never plain text."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    password: str
    role: Role = "user"  # Rows written before roles existed load as plain users


class SessionUser(BaseModel):
    """Public projection of a user, kept as the active session"""
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: Role = "user"

    @classmethod
    def from_record(cls, record: UserRecord) -> "SessionUser":
        return cls(id=record.id, email=record.email, name=record.name, role=record.role)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
