"""User and login API schemas.

Request models check JSON types only; email format, name rules, password
strength and role values are enforced by the domain (400 with a field).
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserCreateRequest(BaseModel):
    """Request body for POST /users. role defaults to developer."""

    model_config = ConfigDict(extra="forbid")

    email: str
    password: str
    first_name: str
    last_name: str
    role: str | None = None


class UserUpdateRequest(BaseModel):
    """Partial profile update. role, is_active and password are honoured for admins only."""

    model_config = ConfigDict(extra="forbid")

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    is_active: bool | None = None
    password: str | None = None


class ChangePasswordRequest(BaseModel):
    """Request body for PATCH /users/{id}/password."""

    current_password: str = Field(..., min_length=1)
    new_password: str
    confirm_password: str

    @model_validator(mode="after")
    def _passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.confirm_password:
            raise ValueError("Password confirmation does not match new password")
        return self


class LoginRequest(BaseModel):
    """Request body for POST /users/login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User as returned by the API (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    is_active: bool


class TokenResponse(BaseModel):
    """JWT token response with the logged-in user."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
