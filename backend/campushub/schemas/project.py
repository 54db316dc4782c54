"""Project listing schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from campushub.schemas.common import CamelModel


class ProjectCreateRequest(CamelModel):
    """
    Body of POST /makeproj.

    There is deliberately no owner field: unknown keys such as `createdBy` or
    `userId` are ignored and the owner comes from the session.
    """

    name: str = Field(min_length=1, max_length=200)
    desc: str = Field(default="", max_length=10_000)
    num: Optional[int] = Field(default=None, ge=0, le=1000, description="Team size wanted")
    type: str = Field(default="", max_length=100)


class ProjectResponse(CamelModel):
    id: uuid.UUID
    name: str
    desc: str
    num: Optional[int] = None
    type: str
    created_by: uuid.UUID
    created_at: datetime


class ProjectCreatedResponse(CamelModel):
    status: str = "success"
    id: uuid.UUID
