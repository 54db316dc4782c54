"""
CampusHub Backend — User Profile Schemas
==========================================

The write schema has no email field: the profile is always written for the
session principal and stamped with that principal's email. A client-supplied
`email` is ignored, so nobody can address someone else's profile through it.
"""

import uuid
from typing import List, Optional

from pydantic import Field, field_validator

from campushub.schemas.common import CamelModel


class ProfileUpdateRequest(CamelModel):
    full_name: str = Field(min_length=1, max_length=200)
    campus: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    instagram: Optional[str] = Field(default=None, max_length=255)
    twitter: Optional[str] = Field(default=None, max_length=255)
    linked_in: Optional[str] = Field(default=None, max_length=255)
    github: Optional[str] = Field(default=None, max_length=255)
    skills: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)

    @field_validator("full_name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("skills", "projects", mode="before")
    @classmethod
    def split_comma_list(cls, v):
        # Older frontend builds send "python, react" instead of a list
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        if v is None:
            return []
        return v


class ProfileResponse(CamelModel):
    id: uuid.UUID
    full_name: str
    email: str
    campus: Optional[str] = None
    phone: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linked_in: Optional[str] = None
    github: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)


class PersonSummary(CamelModel):
    """Entry of the public people directory."""

    full_name: str
    skills: List[str] = Field(default_factory=list)
