"""
CampusHub Backend — Club Model
================================

What:  ORM model for the `clubs` table (club listings with a poster image).
Why:   The poster is kept next to the listing as a blob, exactly as uploaded,
       together with its declared content type so it can be served back.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, LargeBinary, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from campushub.database import Base


class Club(Base):
    __tablename__ = "clubs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    club_name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    google_form_link: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Deferred: listing clubs must not pull every poster into memory
    poster_image: Mapped[Optional[bytes]] = mapped_column(
        LargeBinary, nullable=True, deferred=True
    )
    poster_content_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    @property
    def has_poster(self) -> bool:
        return self.poster_content_type is not None

    def __repr__(self) -> str:
        return f"<Club(id={self.id}, club_name='{self.club_name}')>"
