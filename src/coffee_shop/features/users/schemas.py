"""Pydantic schemas for user accounts, defining the structure for request and response data."""

import datetime
import re
from typing import Optional

from pydantic import BaseModel, Field, EmailStr, field_validator

from ...common.schemas import CamelModel
from .models import Role

PASSWORD_PATTERN = re.compile(r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[@#$!%^&+=])(?=\S+$).{8,}$")
PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 characters with 1 uppercase, 1 lowercase, "
    "1 number and 1 special character"
)


def check_password_policy(password: str) -> str:
    if not PASSWORD_PATTERN.match(password):
        raise ValueError(PASSWORD_POLICY_MESSAGE)
    return password


class UserRegister(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")

    @field_validator("password")
    @classmethod
    def password_meets_policy(cls, value: str) -> str:
        return check_password_policy(value)


class UserLogin(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class NewRole(BaseModel):
    email: EmailStr = Field(..., description="Email of the user whose role changes")
    role: Role = Field(..., description="New role")


class UserUpdate(CamelModel):
    password: Optional[str] = Field(None, description="New password")
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    avatar: Optional[str] = Field(None, max_length=500)

    @field_validator("password")
    @classmethod
    def password_meets_policy(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return check_password_policy(value)


class UserSummary(CamelModel):
    id: int
    email: str
    role: Role


class UserResponse(UserSummary):
    username: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    avatar: Optional[str] = None
    created_at: datetime.datetime = Field(
        ..., description="Timestamp of when the user was created"
    )
    updated_at: datetime.datetime = Field(
        ..., description="Timestamp of when the user was last updated"
    )


class Token(BaseModel):
    token: str
