"""
CampusHub Backend — Auth Schemas
==================================

What:  Signup payload and login/session responses.

Signup:
    All six fields are required. `campus1` is accepted as an alias of
    `campus` for older frontend builds. Whitespace is trimmed from every field
    except the password, which is taken verbatim.

Login has no request schema: the route reads the body itself so that a
malformed body becomes the same generic auth failure as a wrong password
instead of a field-level validation error.
"""

import re
import uuid

from pydantic import AliasChoices, BaseModel, Field, field_validator

from campushub.auth.principal import Principal, PrincipalCandidate

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class SignupRequest(BaseModel):
    firstname: str = Field(min_length=1, max_length=100)
    lastname: str = Field(min_length=1, max_length=100)
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=1024)
    campus: str = Field(
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("campus", "campus1"),
    )

    @field_validator("firstname", "lastname", "username", "email", "campus", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not _EMAIL_PATTERN.match(v):
            raise ValueError("invalid email address")
        return v.lower()

    def to_candidate(self) -> PrincipalCandidate:
        return PrincipalCandidate(
            username=self.username,
            email=self.email,
            firstname=self.firstname,
            lastname=self.lastname,
            campus=self.campus,
        )


class PrincipalResponse(BaseModel):
    """Public view of the logged-in user."""

    id: uuid.UUID
    username: str
    email: str
    firstname: str
    lastname: str
    campus: str

    @classmethod
    def from_principal(cls, principal: Principal) -> "PrincipalResponse":
        return cls(
            id=principal.id,
            username=principal.username,
            email=principal.email,
            firstname=principal.firstname,
            lastname=principal.lastname,
            campus=principal.campus,
        )


class LoginResponse(BaseModel):
    status: str = "success"
    message: str = "Welcome"
    user: PrincipalResponse
