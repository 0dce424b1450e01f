"""Request bodies for login and self-service profile settings.

Fields are optional so that handlers can answer missing values with the
service's own error messages instead of a generic validation error.
"""
from pydantic import BaseModel

from .managers import Manager


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    user: Manager
    token: str


class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None


class PasswordChange(BaseModel):
    current_password: str | None = None
    new_password: str | None = None
