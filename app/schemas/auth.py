from __future__ import annotations

import uuid

from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator

from app.models.user import Role


class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=1, max_length=100)
    role: Role = Role.USER
    bio: str = Field(default="", max_length=1000)
    avatar: str = Field(default="", max_length=500)
    certification: str = Field(default="", max_length=255)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: uuid.UUID
    email: EmailStr
    name: str
    role: Role
    bio: str
    avatar: str
    certification: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
