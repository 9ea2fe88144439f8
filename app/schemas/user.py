from enum import Enum
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class Role(str, Enum):
    ADMIN = "Admin"
    TEACHER = "Teacher"
    STUDENT = "Student"


STAFF_ROLES = (Role.ADMIN.value, Role.TEACHER.value)


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    # "designation" è il nome del campo usato dal vecchio frontend
    role: Optional[Role] = Field(default=None, validation_alias=AliasChoices("role", "designation"))
    password: Optional[str] = None


class User(BaseModel):
    """Vista pubblica di un utente: non contiene mai l'hash della password."""
    model_config = ConfigDict(use_enum_values=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: Role
    createdAt: datetime


class UserRecord(User):
    passwordHash: str

    def public(self) -> User:
        return User(**self.model_dump(exclude={"passwordHash"}))


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    role: Role
    name: str


def normalize_email(email: str) -> str:
    """Forma canonica usata sia in registrazione sia in login."""
    return email.strip().lower()
