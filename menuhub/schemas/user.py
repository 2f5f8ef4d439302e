from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from menuhub.models.user import Role


class UserRead(BaseModel):
    """External view of a user; credentials and login codes never appear here."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    phone_number: str
    email: EmailStr
    role: Role
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    phone_number: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)


class RoleAssignment(BaseModel):
    role: Role
