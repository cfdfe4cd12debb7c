from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from services.password_policy import password_policy_errors


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        username = value.strip()
        if not username:
            raise ValueError("username must not be blank")
        if any(c.isspace() for c in username):
            raise ValueError("username must not contain whitespace")
        return username

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        errors = password_policy_errors(value)
        if errors:
            raise ValueError("; ".join(errors))
        return value


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class NewUserOut(BaseModel):
    username: str
    email: str
    token: str


class MeOut(BaseModel):
    id: int
    username: str
    email: str
    roles: list[str] = Field(default_factory=list)
