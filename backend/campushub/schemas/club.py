"""Club listing schemas. The poster itself is served separately as bytes."""

import uuid
from datetime import datetime
from typing import Optional

from campushub.schemas.common import CamelModel


class ClubResponse(CamelModel):
    id: uuid.UUID
    club_name: str
    type: str
    description: str
    google_form_link: Optional[str] = None
    poster_url: Optional[str] = None
    created_at: datetime


class ClubCreatedResponse(CamelModel):
    status: str = "success"
    message: str = "Club added!"
    id: uuid.UUID
