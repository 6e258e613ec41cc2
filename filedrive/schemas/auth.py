"""Schemas for signup/login."""

from typing import Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    name: Optional[str] = Field(None, description="Display name (defaults to the email local part)")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")

    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Alice", "email": "alice@example.com", "password": "correct-horse"}]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_model(cls, user) -> "UserResponse":
        return cls(id=user.user_id, name=user.display_name, email=user.email)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
