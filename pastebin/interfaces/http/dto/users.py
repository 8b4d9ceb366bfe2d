from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)
    password_confirmation: str = Field(
        max_length=128,
        validation_alias=AliasChoices("password_confirmation", "repassword"),
    )


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class UserDTO(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime


class TokenDTO(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int


class ClaimsDTO(BaseModel):
    subject: str
    issued_at: datetime
    expires_at: datetime
