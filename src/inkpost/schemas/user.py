"""Account and authentication schemas."""

from typing import Annotated

from pydantic import ConfigDict, EmailStr, Field, StringConstraints

from .common import ApiModel, RequestModel

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class CredentialsModel(RequestModel):
    """Request body carrying a password, which is hashed exactly as typed."""

    model_config = ConfigDict(str_strip_whitespace=False)


class RegisterRequest(CredentialsModel):
    """Schema for creating an account."""

    username: Username
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(CredentialsModel):
    """Credentials exchanged for a session token."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserPublic(ApiModel):
    """Public view of an account returned alongside a token."""

    username: str
    email: str


class CurrentUser(ApiModel):
    """Identity resolved by the authorization gate; carries no password fields."""

    id: int
    username: str
    email: str


class AuthResponse(ApiModel):
    """Token plus the public identity it was issued for."""

    token: str
    user: UserPublic
