"""
Boutique Backend — Authentication Schemas
==========================================

What:  Request bodies for registration/login, the token response, and the
       Identity decoded from a session token.

Request fields are Optional: "required" is a business rule
enforced by AuthService (ValidationError → 400), so an empty body and a body
with a blank password produce the same response.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from boutique.models.user import Role


class RegisterRequest(BaseModel):
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None)
    role: Optional[str] = Field(
        default=None,
        description="client (default) or admin",
    )


class LoginRequest(BaseModel):
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None)


class TokenResponse(BaseModel):
    token: str = Field(description="Signed session token, valid for one hour")


class Identity(BaseModel):
    """
    Authenticated caller, decoded from a verified session token.

    Attached to request.state.identity by the access-control dependency.
    """
    id: int
    email: str
    role: Role

    model_config = ConfigDict(frozen=True)
