"""
Blog API — Auth Request/Response Schemas
==========================================

What:  Pydantic models for /auth/signup and /auth/login.
Why:   The public user view is a separate model so the password hash can
       never be serialized into a response by accident.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """
    Body of both signup and login.

    Presence is the only rule: no email format check, no password policy.
    """
    email: str = Field(min_length=1, description="Account email (exact, case-sensitive match)")
    password: str = Field(min_length=1, description="Plaintext password; hashed before storage")


class PublicUser(BaseModel):
    """What the API reveals about a user."""
    id: int
    email: str

    model_config = {"from_attributes": True}


class SignupResponse(BaseModel):
    message: str = Field(default="User created successfully")
    user: PublicUser
    token: Optional[str] = Field(
        default=None,
        description="Present only when the server issues tokens on signup",
    )


class LoginResponse(BaseModel):
    token: str = Field(description="Signed bearer token carrying {id, email}")
    user: PublicUser


class Identity(BaseModel):
    """The caller on authenticated routes, decoded from a verified bearer token."""
    id: int
    email: str
